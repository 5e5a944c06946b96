"""功能模块基类 - 请求合并与发送的通用逻辑。"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from ..core.error import ValidationError
from ..core.transport import BaseTransport
from ..transport.files import FileAttachment, resolve_file
from ..transport.multipart import MultipartForm

logger = logging.getLogger(__name__)

FileResolver = Callable[..., Awaitable[FileAttachment]]
"""文件解析函数签名: ``(reference, kind) -> FileAttachment``。"""


def build_request(
    request: Mapping[str, Any] | None,
    overrides: Mapping[str, Any],
    defaults: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """合并默认值、请求映射与关键字参数, 生成新的请求体。

    关键字参数优先于请求映射中的同名键。显式传入 None 的字段, 若存在非 None
    默认值, 则保留默认值。调用方传入的映射不会被修改。

    Args:
        request: 请求映射, 可为 None。
        overrides: 关键字参数。
        defaults: 默认值。

    Returns:
        dict[str, Any]: 新的请求体。

    Raises:
        ValidationError: ``request`` 不是映射。
    """
    if request is not None and not isinstance(request, Mapping):
        raise ValidationError("request must be an object")

    body: dict[str, Any] = dict(defaults or {})
    for source in (request or {}, overrides):
        for key, value in source.items():
            if value is None and body.get(key) is not None:
                continue
            body[key] = value
    return body


class BaseAPI:
    """功能模块基类。

    Attributes:
        transport: 负责网络交换的传输层。
    """

    # 模块标识, 用于日志
    name: str = "base"

    def __init__(
        self,
        transport: BaseTransport,
        *,
        file_resolver: FileResolver = resolve_file,
    ) -> None:
        """初始化模块。

        Args:
            transport: 传输层实例。
            file_resolver: 文件解析函数, 默认为 ``resolve_file``。
        """
        self.transport = transport
        self._resolve_file = file_resolver

    async def _send(self, endpoint: str, body: Mapping[str, Any]) -> Any:
        logger.debug(
            "%s: sending %s with models=%s",
            self.name,
            endpoint,
            body.get("models"),
        )
        return await self.transport.send(endpoint, body)

    async def _send_multipart(self, endpoint: str, form: MultipartForm) -> Any:
        logger.debug(
            "%s: sending multipart %s with fields=%s",
            self.name,
            endpoint,
            form.field_names(),
        )
        return await self.transport.send_multipart(endpoint, form)
