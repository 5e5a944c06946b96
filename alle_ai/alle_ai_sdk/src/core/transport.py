"""Transport 基类 - 定义网络交换的统一接口。"""

from __future__ import annotations

import types
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..transport.multipart import MultipartForm


class BaseTransport(ABC):
    """传输层基类, 负责一次请求/响应交换。

    实现类在成功时返回解码后的响应体(不做任何改写), 失败时抛出且只抛出
    一个 ``AlleAIError`` 子类。不做重试。
    """

    # 传输层标识
    name: str = "base"

    @abstractmethod
    async def send(self, endpoint: str, body: Mapping[str, Any]) -> Any:
        """以 JSON 请求体发送 POST 请求。

        Args:
            endpoint: 以 ``/`` 开头的相对路径, 如 ``/chat/completions``。
            body: JSON 请求体。

        Returns:
            Any: 解码后的响应体。
        """

    @abstractmethod
    async def send_multipart(self, endpoint: str, form: MultipartForm) -> Any:
        """以 multipart/form-data 请求体发送 POST 请求。

        Args:
            endpoint: 相对路径。
            form: 本次请求专用的表单。

        Returns:
            Any: 解码后的响应体。
        """

    async def close(self) -> None:
        """释放底层资源, 默认无操作。"""

    async def __aenter__(self) -> BaseTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        await self.close()
