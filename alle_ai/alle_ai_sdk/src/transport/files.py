"""文件解析 - 把本地路径或 URL 转换为可附加到表单的字节内容。

远程文件先流式下载到临时文件, 无论成功、超出大小限制还是中途失败,
临时文件都会被删除。
"""

from __future__ import annotations

import base64
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Literal
from urllib.parse import unquote, urlparse

import httpx

from ..core.error import ValidationError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 20 * 1024 * 1024
"""单个文件的大小上限(20MB)。"""

FileKind = Literal["image", "audio", "video", "pdf"]

SUPPORTED_EXTENSIONS: dict[str, tuple[str, ...]] = {
    "image": (".jpg", ".jpeg", ".png", ".gif", ".bmp"),
    "audio": (".mp3", ".wav", ".ogg", ".m4a", ".aac"),
    "video": (".mp4", ".mov", ".avi", ".webm"),
    "pdf": (".pdf",),
}

MIME_TYPES: dict[str, str] = {
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".ogg": "audio/ogg",
    ".m4a": "audio/mp4",
    ".aac": "audio/aac",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".mp4": "video/mp4",
    ".mov": "video/quicktime",
    ".avi": "video/x-msvideo",
    ".webm": "video/webm",
    ".pdf": "application/pdf",
}


@dataclass(frozen=True)
class FileAttachment:
    """解析后的文件。

    Attributes:
        content: 文件字节内容。
        filename: 附加到表单时使用的文件名。
        mime_type: MIME 类型。
        source: 原始引用(本地绝对路径或 URL)。
    """

    content: bytes
    filename: str
    mime_type: str
    source: str

    @property
    def size(self) -> int:
        return len(self.content)


def is_url(reference: str) -> bool:
    """是否为 http(s) URL。"""
    parsed = urlparse(reference.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _format_size(size: int) -> str:
    return f"{size / 1024 / 1024:.2f}MB"


def _size_limit_message(size: int | None = None) -> str:
    limit = f"{MAX_FILE_SIZE // (1024 * 1024)}MB"
    if size is None:
        return f"File size exceeds max limit ({limit})"
    return f"File size ({_format_size(size)}) exceeds max limit ({limit})"


def _check_extension(extension: str, kind: str, *, remote: bool) -> None:
    allowed = SUPPORTED_EXTENSIONS[kind]
    if extension not in allowed:
        label = "URL file" if remote else "File"
        raise ValueError(
            f"{label} type '{extension}' not supported for {kind}. "
            f"Supported types: {', '.join(allowed)}"
        )


def _mime_type(extension: str) -> str:
    return MIME_TYPES.get(extension, "application/octet-stream")


async def _stream_to_file(
    client: httpx.AsyncClient, url: str, destination: Path
) -> None:
    async with client.stream("GET", url) as response:
        if response.status_code != 200:
            raise ValueError(f"Failed to download file: {response.reason_phrase}")

        declared = response.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > MAX_FILE_SIZE:
            raise ValueError(_size_limit_message(int(declared)))

        received = 0
        with destination.open("wb") as handle:
            async for chunk in response.aiter_bytes():
                received += len(chunk)
                if received > MAX_FILE_SIZE:
                    raise ValueError(_size_limit_message())
                handle.write(chunk)


async def _download(
    url: str, kind: str, http_client: httpx.AsyncClient | None
) -> FileAttachment:
    path = PurePosixPath(unquote(urlparse(url).path))
    extension = path.suffix.lower()
    _check_extension(extension, kind, remote=True)

    fd, temp_name = tempfile.mkstemp(prefix="alle-ai-", suffix=extension)
    os.close(fd)
    temp_path = Path(temp_name)

    logger.debug("Downloading %s file from %s", kind, url)
    try:
        if http_client is not None:
            await _stream_to_file(http_client, url, temp_path)
        else:
            async with httpx.AsyncClient(follow_redirects=True) as client:
                await _stream_to_file(client, url, temp_path)
        content = temp_path.read_bytes()
    finally:
        temp_path.unlink(missing_ok=True)

    return FileAttachment(
        content=content,
        filename=path.name,
        mime_type=_mime_type(extension),
        source=url,
    )


def _read_local(reference: str, kind: str) -> FileAttachment:
    path = Path(reference.strip()).expanduser().resolve()

    if not path.exists():
        raise ValueError(f"File not found: {reference}")
    if not path.is_file():
        raise ValueError(f"Not a file: {reference}")

    size = path.stat().st_size
    if size > MAX_FILE_SIZE:
        raise ValueError(_size_limit_message(size))

    extension = path.suffix.lower()
    _check_extension(extension, kind, remote=False)

    return FileAttachment(
        content=path.read_bytes(),
        filename=path.name,
        mime_type=_mime_type(extension),
        source=str(path),
    )


async def resolve_file(
    reference: str,
    kind: FileKind,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> FileAttachment:
    """读取本地文件或下载远程文件。

    Args:
        reference: 本地路径或 http(s) URL。
        kind: 文件类别, 决定扩展名白名单。
        http_client: 用于下载的 httpx 客户端, 为 None 时临时创建。

    Returns:
        FileAttachment: 文件内容与元数据。

    Raises:
        ValidationError: 文件不存在、类型不支持、超出大小限制或下载失败。
    """
    if kind not in SUPPORTED_EXTENSIONS:
        raise ValidationError(f"Unsupported file kind: {kind}")

    try:
        if is_url(reference):
            return await _download(reference.strip(), kind, http_client)
        return _read_local(reference, kind)
    except (OSError, ValueError, httpx.HTTPError) as e:
        raise ValidationError(
            f"Failed to process {kind} file: {e}",
            details={"file": reference},
        ) from e


async def attach_file(
    reference: str, *, http_client: httpx.AsyncClient | None = None
) -> str:
    """读取图片并返回 base64 编码字符串。

    旧接口, 新代码请使用 ``resolve_file``。
    """
    attachment = await resolve_file(reference, "image", http_client=http_client)
    return base64.b64encode(attachment.content).decode("ascii")
