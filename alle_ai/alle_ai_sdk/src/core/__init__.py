"""Core 模块 - 错误体系、配置、请求类型与校验。"""

from .config import DEFAULT_BASE_URL, ClientConfig
from .error import (
    AlleAIError,
    APIError,
    AuthenticationError,
    ConnectionError,
    ErrorCode,
    ErrorKind,
    InvalidRequestError,
    RateLimitError,
    ServiceUnavailableError,
    ValidationError,
)
from .transport import BaseTransport
from .types import (
    CONTENT_TYPES,
    AudioUrlContent,
    ContentPart,
    ContentType,
    ImageUrlContent,
    MessageEntry,
    ResponseFormat,
    TextContent,
    VideoUrlContent,
)

__all__ = [
    # 类型定义
    "CONTENT_TYPES",
    "ContentType",
    "ContentPart",
    "TextContent",
    "ImageUrlContent",
    "AudioUrlContent",
    "VideoUrlContent",
    "MessageEntry",
    "ResponseFormat",
    # 配置
    "ClientConfig",
    "DEFAULT_BASE_URL",
    # 传输层
    "BaseTransport",
    # 错误
    "AlleAIError",
    "ErrorCode",
    "ErrorKind",
    "ValidationError",
    "AuthenticationError",
    "InvalidRequestError",
    "RateLimitError",
    "ServiceUnavailableError",
    "ConnectionError",
    "APIError",
]
