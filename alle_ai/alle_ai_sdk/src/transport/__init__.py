"""Transport 模块 - 错误分类、表单构造、文件解析与 HTTP 传输。"""

from .base import (
    UNKNOWN_FORMAT_MESSAGE,
    build_headers,
    classify_exception,
    classify_response,
    decode_json_body,
    extract_error_message,
    invalid_response_error,
    looks_like_html,
    map_status_code_to_error,
)
from .files import (
    MAX_FILE_SIZE,
    SUPPORTED_EXTENSIONS,
    FileAttachment,
    attach_file,
    resolve_file,
)
from .http import HttpTransport
from .multipart import MultipartForm

__all__ = [
    "FileAttachment",
    "HttpTransport",
    "MAX_FILE_SIZE",
    "MultipartForm",
    "SUPPORTED_EXTENSIONS",
    "UNKNOWN_FORMAT_MESSAGE",
    "attach_file",
    "build_headers",
    "classify_exception",
    "classify_response",
    "decode_json_body",
    "extract_error_message",
    "invalid_response_error",
    "looks_like_html",
    "map_status_code_to_error",
    "resolve_file",
]
