"""核心类型定义 - 内容块、消息条目等请求数据结构。

所有接口都接受普通字典; 这里的数据类只是构造请求体的便捷工具。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ContentType(str, Enum):
    """内容块类型。"""

    TEXT = "text"
    AUDIO_URL = "audio_url"
    IMAGE_URL = "image_url"
    VIDEO_URL = "video_url"


CONTENT_TYPES: tuple[str, ...] = tuple(t.value for t in ContentType)
"""合法的内容块 ``type`` 取值, 按固定顺序排列。"""


@dataclass
class TextContent:
    """文本内容块。"""

    text: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": ContentType.TEXT.value, "text": self.text}


@dataclass
class ImageUrlContent:
    """图片 URL 内容块。"""

    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": ContentType.IMAGE_URL.value, "image_url": {"url": self.url}}


@dataclass
class AudioUrlContent:
    """音频 URL 内容块。"""

    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": ContentType.AUDIO_URL.value, "audio_url": {"url": self.url}}


@dataclass
class VideoUrlContent:
    """视频 URL 内容块。"""

    url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": ContentType.VIDEO_URL.value, "video_url": {"url": self.url}}


ContentPart = TextContent | ImageUrlContent | AudioUrlContent | VideoUrlContent
"""内容块联合类型。"""


def _parts_to_dicts(parts: list[ContentPart]) -> list[dict[str, Any]]:
    return [part.to_dict() for part in parts]


@dataclass
class MessageEntry:
    """消息条目。

    至少需要 ``system``, ``user``, ``assistants`` 之一。``assistants`` 以模型
    标识为键, 值为该模型此前的回复内容。
    """

    system: list[ContentPart] | None = None
    user: list[ContentPart] | None = None
    assistants: dict[str, list[ContentPart]] | None = None

    def to_dict(self) -> dict[str, Any]:
        """转换为请求体中的消息字典, 只输出已设置的键。"""
        result: dict[str, Any] = {}

        if self.system is not None:
            result["system"] = _parts_to_dicts(self.system)
        if self.user is not None:
            result["user"] = _parts_to_dicts(self.user)
        if self.assistants is not None:
            result["assistants"] = {
                model: _parts_to_dicts(parts)
                for model, parts in self.assistants.items()
            }

        return result

    @classmethod
    def system_text(cls, text: str) -> MessageEntry:
        """创建系统文本消息的便捷方法。"""
        return cls(system=[TextContent(text=text)])

    @classmethod
    def user_text(cls, text: str) -> MessageEntry:
        """创建用户文本消息的便捷方法。"""
        return cls(user=[TextContent(text=text)])


@dataclass
class ResponseFormat:
    """期望的输出格式, 可按模型单独指定。"""

    type: ContentType = ContentType.TEXT
    model_specific: dict[str, ContentType] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": ContentType(self.type).value}
        if self.model_specific:
            result["model_specific"] = {
                model: ContentType(kind).value
                for model, kind in self.model_specific.items()
            }
        return result
