"""对话模块 - 多模型对话补全、组合、对比与联网搜索。"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core.validation import validate_chat_request, validate_models
from .base import BaseAPI, build_request


class ChatAPI(BaseAPI):
    """对话类接口。

    所有方法接受请求映射和/或关键字参数, 例如::

        await client.chat.completions(
            models=["gpt-4o", "yi-large"],
            messages=[
                {"system": [{"type": "text", "text": "You are a helpful assistant."}]},
                {"user": [{"type": "text", "text": "What is photosynthesis?"}]},
            ],
            temperature=0.7,
        )

    请求体原样发送, 响应体原样返回。
    """

    name: str = "chat"

    async def completions(
        self, request: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Any:
        """多模型对话补全, 每个模型分别返回结果。

        Args:
            request: 请求映射。必填 ``models``, ``messages``; 可选
                ``response_format``, ``web_search``, ``comparison``,
                ``combination``, ``temperature``, ``max_tokens``,
                ``frequency_penalty``, ``presence_penalty``, ``stream``,
                ``model_specific_params``。
            **kwargs: 覆盖 ``request`` 中的同名字段。

        Returns:
            Any: 解码后的响应体。

        Raises:
            ValidationError: 请求不合法, 此时不会发送请求。
            AlleAIError: 传输或服务端错误。
        """
        body = build_request(request, kwargs)
        validate_chat_request(body)
        return await self._send("/chat/completions", body)

    async def combination(
        self, request: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Any:
        """综合多个模型的输出, 返回一个合并后的回答。

        参数与 ``completions`` 相同。
        """
        body = build_request(request, kwargs)
        validate_chat_request(body)
        return await self._send("/chat/combination", body)

    async def comparison(
        self, request: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Any:
        """只返回模型之间的对比分析。

        参数与 ``completions`` 相同, 通常需要 ``comparison`` 字段。
        此接口只检查 ``models``, 消息内容交给服务端校验。
        """
        body = build_request(request, kwargs)
        validate_models(body.get("models"))
        return await self._send("/chat/comparison", body)

    async def search(
        self, request: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Any:
        """结合实时网络搜索结果生成回答。

        参数与 ``completions`` 相同。
        """
        body = build_request(request, kwargs)
        validate_chat_request(body)
        return await self._send("/ai/web-search", body)
