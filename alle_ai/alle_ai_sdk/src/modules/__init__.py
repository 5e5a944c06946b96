"""Modules 模块 - 面向调用方的对话、图片、音频、视频接口。"""

from .audio import AudioAPI
from .base import BaseAPI, build_request
from .chat import ChatAPI
from .image import ImageAPI
from .video import VideoAPI

__all__ = [
    "AudioAPI",
    "BaseAPI",
    "ChatAPI",
    "ImageAPI",
    "VideoAPI",
    "build_request",
]
