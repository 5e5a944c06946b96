"""传输层基础工具 - 错误分类与请求头。

把一次 HTTP 交换的结果(状态码 + 原始响应体, 或传输异常)映射到且仅映射到
一个类型化错误。这里的函数都是纯函数, 可在并发调用中安全使用。
"""

from __future__ import annotations

import builtins
import json
from typing import Any

import httpx

from ..core.error import (
    AlleAIError,
    APIError,
    AuthenticationError,
    ConnectionError,
    ErrorCode,
    InvalidRequestError,
    RateLimitError,
    ServiceUnavailableError,
)

UNKNOWN_FORMAT_MESSAGE = "Server responded with unknown format. Please try again later."
"""响应体既不是可识别的 JSON 错误也可能是 HTML 错误页时使用的固定消息。"""

CONNECTION_FAILED_MESSAGE = (
    "Could not connect to the API. Please check your internet connection."
)

INVALID_JSON_MESSAGE = "Server returned invalid JSON response"

_HTML_MARKERS = ("<!doctype html", "<html")


def looks_like_html(text: Any) -> bool:
    """文本中任意位置包含 doctype 或 ``<html`` 标签即视为 HTML。"""
    if not isinstance(text, str):
        return False
    lowered = text.lower()
    return any(marker in lowered for marker in _HTML_MARKERS)


def extract_error_message(body: str | bytes | None, status: int) -> str:
    """从错误响应体中提取人类可读的消息。

    规则依次为: HTML 页面 -> 固定消息; JSON 且 ``details.raw`` 是 HTML ->
    固定消息; JSON 的 ``message`` 字段; JSON 的 ``error`` 字段(非字符串时
    序列化为 JSON); 无法解析的响应体同样使用固定消息。

    Args:
        body: 原始响应体, 读取失败时为 None。
        status: HTTP 状态码。

    Returns:
        str: 错误消息。
    """
    if body is None:
        return UNKNOWN_FORMAT_MESSAGE

    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body

    if looks_like_html(text):
        return UNKNOWN_FORMAT_MESSAGE

    try:
        payload = json.loads(text)
    except (ValueError, RecursionError):
        # 非 JSON 也非 HTML 时沿用同一条固定消息
        return UNKNOWN_FORMAT_MESSAGE

    fallback = f"Request failed with status: {status}"
    if not isinstance(payload, dict):
        return fallback

    details = payload.get("details")
    if isinstance(details, dict) and looks_like_html(details.get("raw")):
        return UNKNOWN_FORMAT_MESSAGE

    message = payload.get("message")
    if message:
        return message if isinstance(message, str) else json.dumps(message)

    error = payload.get("error")
    if error:
        return error if isinstance(error, str) else json.dumps(error)

    return fallback


_STATUS_ERROR_MAP: dict[int, tuple[type[AlleAIError], ErrorCode]] = {
    400: (InvalidRequestError, ErrorCode.INVALID_REQUEST),
    401: (AuthenticationError, ErrorCode.AUTH_ERROR),
    403: (AuthenticationError, ErrorCode.PERMISSION_DENIED),
    404: (APIError, ErrorCode.RESOURCE_NOT_FOUND),
    429: (RateLimitError, ErrorCode.RATE_LIMIT),
    500: (ServiceUnavailableError, ErrorCode.SERVICE_ERROR),
    502: (ServiceUnavailableError, ErrorCode.SERVICE_ERROR),
    503: (ServiceUnavailableError, ErrorCode.SERVICE_ERROR),
    504: (ServiceUnavailableError, ErrorCode.SERVICE_ERROR),
}


def map_status_code_to_error(status: int, message: str) -> AlleAIError:
    """根据 HTTP 状态码映射到具体错误类型。

    未列出的状态码映射为 ``APIError``, 代码为 ``API_ERROR_{status}``。

    Args:
        status: HTTP 状态码。
        message: 错误消息。

    Returns:
        具体的错误类型实例, 携带原始状态码与 ``{message, status}`` 详情。
    """
    details = {"message": message, "status": status}

    mapped = _STATUS_ERROR_MAP.get(status)
    if mapped is None:
        return APIError(message, f"API_ERROR_{status}", status=status, details=details)

    error_class, code = mapped
    return error_class(message, code, status=status, details=details)


def classify_response(status: int, body: str | bytes | None) -> AlleAIError:
    """把非 2xx 响应分类为类型化错误。"""
    return map_status_code_to_error(status, extract_error_message(body, status))


def invalid_response_error(status: int) -> APIError:
    """2xx 响应但响应体不是合法 JSON。"""
    return APIError(
        INVALID_JSON_MESSAGE,
        ErrorCode.INVALID_RESPONSE,
        status=status,
        details={"message": "Invalid JSON response"},
    )


def decode_json_body(status: int, content: bytes) -> Any:
    """解码成功响应的 JSON 响应体。

    Raises:
        APIError: 响应体无法解析(代码 ``INVALID_RESPONSE``)。
    """
    try:
        return json.loads(content)
    except (ValueError, RecursionError) as e:
        raise invalid_response_error(status) from e


def classify_exception(error: BaseException) -> AlleAIError:
    """把交换过程中抛出的异常分类为类型化错误。

    已经是 ``AlleAIError`` 的异常原样返回, 不做二次包装; 网络层异常归为
    ``ConnectionError``; 其他异常包装为 ``UNEXPECTED_ERROR``。

    Args:
        error: 原始异常对象。

    Returns:
        具体的错误类型实例。
    """
    if isinstance(error, AlleAIError):
        return error

    if isinstance(error, (httpx.TransportError, builtins.ConnectionError)):
        return ConnectionError(
            CONNECTION_FAILED_MESSAGE,
            details={"original_error": str(error)},
        )

    error_message = str(error) or type(error).__name__
    return APIError(
        f"An unexpected error occurred: {error_message}",
        ErrorCode.UNEXPECTED_ERROR,
        details={"original_error": error_message},
    )


def build_headers(api_key: str, user_agent: str) -> dict[str, str]:
    """构造认证请求头。

    Args:
        api_key: API 密钥。
        user_agent: User-Agent 字符串。

    Returns:
        dict[str, str]: 请求头字典。
    """
    return {
        "X-API-KEY": api_key,
        "Authorization": f"Bearer {api_key}",
        "Accept": "application/json",
        "User-Agent": user_agent,
    }
