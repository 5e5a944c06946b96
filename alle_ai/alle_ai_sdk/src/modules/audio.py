"""音频模块 - 音频生成、文本转语音与语音转文本。"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core.validation import validate_audio_generate, validate_stt, validate_tts
from ..transport.multipart import MultipartForm
from .base import BaseAPI, build_request

DEFAULT_VOICE = "nova"


class AudioAPI(BaseAPI):
    """音频类接口。

    文本转语音与语音转文本目前只支持单个模型。
    """

    name: str = "audio"

    async def generate(
        self, request: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Any:
        """根据提示词生成音频(音乐、音效等)。

        Args:
            request: 请求映射。必填 ``models``, ``prompt``; 可选
                ``model_specific_params``。
            **kwargs: 覆盖 ``request`` 中的同名字段。
        """
        body = build_request(request, kwargs, {"model_specific_params": {}})
        validate_audio_generate(body)
        return await self._send(
            "/audio/generate",
            {
                "models": body["models"],
                "prompt": body["prompt"],
                "model_specific_params": body["model_specific_params"],
            },
        )

    async def tts(
        self, request: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Any:
        """文本转语音。

        Args:
            request: 请求映射。必填 ``models`` (只允许一个), ``prompt``;
                可选 ``voice`` (默认 "nova"), ``model_specific_params``。
            **kwargs: 覆盖 ``request`` 中的同名字段。
        """
        body = build_request(
            request,
            kwargs,
            {"voice": DEFAULT_VOICE, "model_specific_params": {}},
        )
        validate_tts(body)
        return await self._send(
            "/audio/tts",
            {
                "models": body["models"],
                "prompt": body["prompt"],
                "voice": body["voice"],
                "model_specific_params": body["model_specific_params"],
            },
        )

    async def stt(
        self, request: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Any:
        """语音转文本。

        Args:
            request: 请求映射。必填 ``models`` (只允许一个), ``audio_file``
                (本地路径或 URL); 可选 ``model_specific_params``。
            **kwargs: 覆盖 ``request`` 中的同名字段。

        Raises:
            ValidationError: 请求不合法或音频文件无法读取。
        """
        body = build_request(request, kwargs, {"model_specific_params": {}})
        validate_stt(body)

        attachment = await self._resolve_file(body["audio_file"], "audio")

        form = (
            MultipartForm()
            .add_models(body["models"])
            .add_file(
                "audio_file",
                attachment.content,
                attachment.filename,
                attachment.mime_type,
            )
        )
        if body["model_specific_params"]:
            form.add_json_field("model_specific_params", body["model_specific_params"])

        return await self._send_multipart("/audio/stt", form)
