"""视频模块 - 文生视频与任务状态查询。"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..core.validation import validate_request_id, validate_video_generate
from .base import BaseAPI, build_request

logger = logging.getLogger(__name__)

_OPTIONAL_FIELDS = ("dimension", "resolution", "seed")


def _generate_defaults() -> dict[str, Any]:
    return {
        "duration": 6,
        "loop": False,
        "aspect_ratio": "16:9",
        "fps": 24,
        "model_specific_params": {},
    }


class VideoAPI(BaseAPI):
    """视频类接口。"""

    name: str = "video"

    async def generate(
        self, request: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> Any:
        """根据提示词生成视频。

        Args:
            request: 请求映射。必填 ``models``, ``prompt``; 可选
                ``duration`` (秒, 默认 6), ``loop`` (默认 False),
                ``aspect_ratio`` (如 "16:9"), ``fps`` (默认 24),
                ``dimension`` (如 "1280x720"), ``resolution`` (如 "720p"),
                ``seed``, ``model_specific_params``。
            **kwargs: 覆盖 ``request`` 中的同名字段。

        Returns:
            Any: 解码后的响应体。
        """
        body = build_request(request, kwargs, _generate_defaults())
        validate_video_generate(body)

        payload: dict[str, Any] = {
            "models": body["models"],
            "prompt": body["prompt"],
            "duration": body["duration"],
            "loop": body["loop"],
            "aspect_ratio": body["aspect_ratio"],
            "fps": body["fps"],
            "model_specific_params": body["model_specific_params"],
        }
        # 未提供的可选字段不出现在请求体中
        for key in _OPTIONAL_FIELDS:
            if body.get(key) is not None:
                payload[key] = body[key]
        return await self._send("/video/generate", payload)

    async def get_video_status(self, request_id: str) -> dict[str, Any]:
        """查询视频生成任务状态。

        服务端尚未开放此接口, 参数校验通过后固定返回 "not available",
        不发送任何请求。

        Args:
            request_id: 生成任务 ID。

        Returns:
            dict[str, Any]: 状态字典。

        Raises:
            ValidationError: ``request_id`` 为空。
        """
        validate_request_id(request_id)
        logger.debug("video status lookup is not available (request_id=%s)", request_id)
        return {
            "status": "not available",
            "message": "This feature is not available yet",
        }
