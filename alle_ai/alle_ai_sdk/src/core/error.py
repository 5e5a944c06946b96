"""错误类型定义 - SDK 的封闭异常体系。

所有失败都以下列类型之一呈现给调用方, 调用方可以按 ``kind`` 或
``isinstance`` 分支处理。错误对象构造后不可修改。
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar


class ErrorCode(str, Enum):
    """固定的错误代码。

    ``API_ERROR_{status}`` 形式的代码是动态生成的, 不在此枚举中。
    """

    # 客户端校验
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_API_KEY = "MISSING_API_KEY"

    # 认证
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # 请求
    INVALID_REQUEST = "INVALID_REQUEST"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RATE_LIMIT = "RATE_LIMIT"

    # 服务/网络
    SERVICE_ERROR = "SERVICE_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"

    # 通用
    API_ERROR = "API_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class ErrorKind(str, Enum):
    """错误种类标签, 每个具体错误类对应一个值。"""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    INVALID_REQUEST = "invalid_request"
    RATE_LIMIT = "rate_limit"
    SERVICE_UNAVAILABLE = "service_unavailable"
    CONNECTION = "connection"
    API = "api"


class AlleAIError(Exception):
    """SDK 基础异常。

    所有具体错误类型的基类。不应直接抛出, 请使用具体子类。

    Attributes:
        message: 人类可读的错误消息。
        code: 机器可读的错误代码。
        status: HTTP 状态码(客户端错误为 None)。
        details: 结构化的错误详情(只读)。
    """

    # 子类应重写这些属性
    kind: ClassVar[ErrorKind] = ErrorKind.API
    default_code: ClassVar[str] = ErrorCode.API_ERROR.value
    default_status: ClassVar[int | None] = None
    user_guide: ClassVar[str] = "Please check your request and try again."

    def __init__(
        self,
        message: str,
        code: ErrorCode | str | None = None,
        *,
        status: int | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        if isinstance(code, ErrorCode):
            code = code.value
        self._message = message
        self._code: str = code or self.default_code
        self._status = status if status is not None else self.default_status
        self._details: Mapping[str, Any] | None = (
            MappingProxyType(dict(details)) if details is not None else None
        )

        super().__init__(message)

    @property
    def message(self) -> str:
        """错误消息。"""
        return self._message

    @property
    def code(self) -> str:
        """错误代码。"""
        return self._code

    @property
    def status(self) -> int | None:
        """HTTP 状态码。"""
        return self._status

    @property
    def details(self) -> Mapping[str, Any] | None:
        """错误详情。"""
        return self._details

    def __str__(self) -> str:
        """格式化错误信息。"""
        parts = [f"[{self.code}]", self.message]

        if self.status is not None:
            parts.append(f"(status {self.status})")

        return " ".join(parts)

    def __repr__(self) -> str:
        """详细错误信息。"""
        return (
            f"{self.__class__.__name__}("
            f"code={self.code!r}, "
            f"message={self.message!r}, "
            f"status={self.status})"
        )

    def format(
        self, *, include_guide: bool = False, include_details: bool = False
    ) -> str:
        """格式化错误信息。

        Args:
            include_guide: 是否包含用户指南。
            include_details: 是否包含详细信息。

        Returns:
            格式化的错误信息。
        """
        lines = [str(self)]

        if include_details and self.details:
            for key, value in self.details.items():
                lines.append(f"  {key}: {value}")

        if include_guide:
            lines.append(f"  Suggestion: {self.user_guide}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """转换为字典, 便于序列化。

        Returns:
            错误信息字典。
        """
        result: dict[str, Any] = {
            "error": {
                "code": self.code,
                "type": self.__class__.__name__,
                "kind": self.kind.value,
                "message": self.message,
            }
        }

        if self.status is not None:
            result["error"]["status"] = self.status

        if self.details is not None:
            result["error"]["details"] = dict(self.details)

        return result


class ValidationError(AlleAIError):
    """请求参数在客户端校验失败, 请求未发送。"""

    kind = ErrorKind.VALIDATION
    default_code = ErrorCode.VALIDATION_ERROR.value
    user_guide = "Fix the offending field before sending the request again."


class AuthenticationError(AlleAIError):
    """认证失败(API Key 无效或无权限)。"""

    kind = ErrorKind.AUTHENTICATION
    default_code = ErrorCode.AUTH_ERROR.value
    default_status = 401
    user_guide = "Check that your API key is correct and has access to this resource."


class InvalidRequestError(AlleAIError):
    """服务端拒绝了请求参数。"""

    kind = ErrorKind.INVALID_REQUEST
    default_code = ErrorCode.INVALID_REQUEST.value
    default_status = 400
    user_guide = "Check the request parameters against the API documentation."


class RateLimitError(AlleAIError):
    """速率限制。"""

    kind = ErrorKind.RATE_LIMIT
    default_code = ErrorCode.RATE_LIMIT.value
    default_status = 429
    user_guide = "Wait before retrying, or upgrade your plan for a higher limit."


class ServiceUnavailableError(AlleAIError):
    """上游服务不可用(5xx)。"""

    kind = ErrorKind.SERVICE_UNAVAILABLE
    default_code = ErrorCode.SERVICE_ERROR.value
    default_status = 503
    user_guide = "The service is temporarily unavailable, please try again later."


class ConnectionError(AlleAIError):
    """连接失败, 请求未得到响应。"""

    kind = ErrorKind.CONNECTION
    default_code = ErrorCode.CONNECTION_ERROR.value
    user_guide = "Could not reach the server, check your network connection."


class APIError(AlleAIError):
    """通用 API 错误, 未归入其他类型的失败。"""

    kind = ErrorKind.API
    default_code = ErrorCode.API_ERROR.value


__all__ = [
    "APIError",
    "AlleAIError",
    "AuthenticationError",
    "ConnectionError",
    "ErrorCode",
    "ErrorKind",
    "InvalidRequestError",
    "RateLimitError",
    "ServiceUnavailableError",
    "ValidationError",
]
