"""图片模块 - 文生图与图片编辑。"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core.validation import validate_image_edit, validate_image_generate
from ..transport.multipart import MultipartForm
from .base import BaseAPI, build_request


def _generate_defaults() -> dict[str, Any]:
    return {
        "width": 1024,
        "height": 1024,
        "n": 1,
        "style_preset": None,
        "seed": None,
        "model_specific_params": {},
    }


class ImageAPI(BaseAPI):
    """图片类接口。"""

    name: str = "image"

    async def generate(
        self, request: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Any:
        """根据提示词生成图片。

        Args:
            request: 请求映射。必填 ``models``, ``prompt``; 可选 ``width``,
                ``height`` (整数, >= 64, 默认 1024), ``n`` (整数, >= 1,
                默认 1), ``seed``, ``style_preset``, ``model_specific_params``。
            **kwargs: 覆盖 ``request`` 中的同名字段。

        Returns:
            Any: 解码后的响应体。
        """
        body = build_request(request, kwargs, _generate_defaults())
        validate_image_generate(body)
        return await self._send(
            "/image/generate",
            {
                "models": body["models"],
                "prompt": body["prompt"],
                "width": body["width"],
                "height": body["height"],
                "n": body["n"],
                "style_preset": body["style_preset"],
                "seed": body["seed"],
                "model_specific_params": body["model_specific_params"],
            },
        )

    async def edit(
        self, request: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Any:
        """按提示词编辑一张图片。

        Args:
            request: 请求映射。必填 ``models``, ``prompt``, ``image_file``
                (本地路径或 URL)。
            **kwargs: 覆盖 ``request`` 中的同名字段。

        Returns:
            Any: 解码后的响应体。

        Raises:
            ValidationError: 请求不合法或图片文件无法读取。
        """
        body = build_request(request, kwargs)
        validate_image_edit(body)

        attachment = await self._resolve_file(body["image_file"], "image")

        form = (
            MultipartForm()
            .add_models(body["models"])
            .add_file(
                "image_file",
                attachment.content,
                attachment.filename,
                attachment.mime_type,
            )
            .add_field("prompt", body["prompt"])
        )
        return await self._send_multipart("/image/edit", form)
