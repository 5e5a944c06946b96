"""测试配置和共享 fixtures。"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from alle_ai.alle_ai_sdk.src.core.transport import BaseTransport
from alle_ai.alle_ai_sdk.src.transport.multipart import MultipartForm


class RecordingTransport(BaseTransport):
    """记录所有调用的传输层替身。"""

    name = "recording"

    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = {"ok": True} if response is None else response
        self.error = error
        self.calls: list[tuple[str, str, Any]] = []
        self.closed = False

    async def send(self, endpoint: str, body: Mapping[str, Any]) -> Any:
        self.calls.append(("json", endpoint, body))
        if self.error is not None:
            raise self.error
        return self.response

    async def send_multipart(self, endpoint: str, form: MultipartForm) -> Any:
        self.calls.append(("multipart", endpoint, form))
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def transport() -> RecordingTransport:
    """返回记录调用的传输层。"""
    return RecordingTransport()


@pytest.fixture
def sample_messages() -> list[dict[str, Any]]:
    """返回示例消息列表。"""
    return [
        {"system": [{"type": "text", "text": "You are a helpful assistant."}]},
        {"user": [{"type": "text", "text": "What is photosynthesis?"}]},
    ]


@pytest.fixture
def image_file(tmp_path) -> str:
    """返回一个临时 PNG 文件路径。"""
    path = tmp_path / "photo.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\nfake-image")
    return str(path)


@pytest.fixture
def audio_file(tmp_path) -> str:
    """返回一个临时 MP3 文件路径。"""
    path = tmp_path / "speech.mp3"
    path.write_bytes(b"ID3fake-audio")
    return str(path)
