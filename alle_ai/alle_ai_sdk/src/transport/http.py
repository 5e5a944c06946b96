"""基于 httpx 的传输层实现。

每次调用只进行一次 HTTP 交换, 不重试; 失败时由 ``transport.base`` 中的
分类函数产生唯一的类型化错误。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from ..core.config import ClientConfig
from ..core.error import AlleAIError
from ..core.transport import BaseTransport
from .base import (
    build_headers,
    classify_exception,
    classify_response,
    decode_json_body,
)
from .multipart import MultipartForm

logger = logging.getLogger(__name__)


class HttpTransport(BaseTransport):
    """httpx 异步传输层。

    Attributes:
        config: 客户端配置。
    """

    name: str = "http"

    def __init__(
        self,
        config: ClientConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """初始化传输层。

        Args:
            config: 客户端配置(API 密钥、端点、超时)。
            client: 外部提供的 httpx 客户端; 为 None 时首次使用时创建,
                并在 ``close()`` 时关闭。
        """
        self.config = config
        self._client: httpx.AsyncClient | None = client
        self._owns_client = client is None
        self._headers = build_headers(config.api_key, config.user_agent)

    def _get_client(self) -> httpx.AsyncClient:
        """获取 httpx 客户端(延迟初始化)。"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.config.timeout))
        return self._client

    def _url(self, endpoint: str) -> str:
        return f"{self.config.normalized_base_url}{endpoint}"

    async def _post(self, endpoint: str, **kwargs: Any) -> Any:
        url = self._url(endpoint)
        logger.debug("POST %s", url)

        try:
            response = await self._get_client().post(
                url, headers=self._headers, **kwargs
            )
        except AlleAIError:
            raise
        except Exception as e:
            error = classify_exception(e)
            logger.warning("Request to %s failed: %s", endpoint, error)
            raise error from e

        if not response.is_success:
            error = classify_response(response.status_code, response.content)
            logger.warning(
                "Request to %s returned %s: %s",
                endpoint,
                response.status_code,
                error,
            )
            raise error

        return decode_json_body(response.status_code, response.content)

    async def send(self, endpoint: str, body: Mapping[str, Any]) -> Any:
        """以 JSON 请求体发送 POST 请求。"""
        return await self._post(endpoint, json=dict(body))

    async def send_multipart(self, endpoint: str, form: MultipartForm) -> Any:
        """以 multipart 表单发送 POST 请求。"""
        data, files = form.encode()
        return await self._post(endpoint, data=data, files=files)

    async def close(self) -> None:
        """关闭自行创建的 httpx 客户端。"""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
