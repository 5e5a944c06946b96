"""统一客户端 - 把各功能模块连接到同一个传输层。"""

from __future__ import annotations

import logging
import types
from typing import Any

from ..core.config import ClientConfig
from ..core.transport import BaseTransport
from ..modules.audio import AudioAPI
from ..modules.chat import ChatAPI
from ..modules.image import ImageAPI
from ..modules.video import VideoAPI
from ..transport.http import HttpTransport

logger = logging.getLogger(__name__)


class AlleAIClient:
    """Alle-AI 平台客户端。

    示例::

        async with AlleAIClient(api_key="your-api-key") as client:
            result = await client.chat.completions(
                models=["gpt-4o", "yi-large"],
                messages=[{"user": [{"type": "text", "text": "Hello"}]}],
            )

    Attributes:
        config: 客户端配置。
        transport: 传输层实例。
        chat: 对话接口。
        image: 图片接口。
        audio: 音频接口。
        video: 视频接口。
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        config: ClientConfig | None = None,
        transport: BaseTransport | None = None,
    ) -> None:
        """初始化客户端。

        Args:
            api_key: API 密钥。
            base_url: 自定义 API 端点。
            timeout: 请求超时秒数, 默认不限制。
            config: 完整配置; 提供时忽略 ``api_key``, ``base_url``, ``timeout``。
            transport: 自定义传输层; 为 None 时使用 ``HttpTransport``。

        Raises:
            ValidationError: 缺少 API 密钥(代码 ``MISSING_API_KEY``)。
        """
        if config is None:
            overrides: dict[str, Any] = {"api_key": api_key or ""}
            if base_url:
                overrides["base_url"] = base_url
            if timeout is not None:
                overrides["timeout"] = timeout
            config = ClientConfig(**overrides)

        config.validate()
        self.config = config
        self.transport: BaseTransport = transport or HttpTransport(config)

        self.chat = ChatAPI(self.transport)
        self.image = ImageAPI(self.transport)
        self.audio = AudioAPI(self.transport)
        self.video = VideoAPI(self.transport)

        logger.debug("AlleAIClient initialized for %s", config.normalized_base_url)

    @classmethod
    def from_env(cls, *, transport: BaseTransport | None = None) -> AlleAIClient:
        """使用环境变量 ``ALLEAI_API_KEY`` 等创建客户端。"""
        return cls(config=ClientConfig.from_env(), transport=transport)

    async def close(self) -> None:
        """关闭传输层。"""
        await self.transport.close()

    async def __aenter__(self) -> AlleAIClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"AlleAIClient(base_url={self.config.base_url!r})"
