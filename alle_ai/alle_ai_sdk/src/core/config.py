"""客户端配置 - API 密钥、端点等连接参数。"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from .error import ErrorCode, ValidationError

DEFAULT_BASE_URL = "https://api.alle-ai.com/api/v1"
"""默认 API 端点。"""

DEFAULT_USER_AGENT = "alle-ai-sdk-python"

API_KEY_ENV = "ALLEAI_API_KEY"
BASE_URL_ENV = "ALLEAI_BASE_URL"
TIMEOUT_ENV = "ALLEAI_TIMEOUT"


@dataclass(frozen=True)
class ClientConfig:
    """客户端配置, 构造后不可修改。

    Attributes:
        api_key: API 密钥。
        base_url: API 端点, 不含末尾斜杠。
        timeout: 单次请求超时秒数, None 表示不限制。
        user_agent: User-Agent 请求头。
    """

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = None
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """从环境变量读取配置。

        读取 ``ALLEAI_API_KEY``, ``ALLEAI_BASE_URL``, ``ALLEAI_TIMEOUT``。
        显式传入的关键字参数优先于环境变量。

        Returns:
            ClientConfig: 配置实例。
        """
        values: dict[str, Any] = {
            "api_key": os.getenv(API_KEY_ENV, ""),
            "base_url": os.getenv(BASE_URL_ENV) or DEFAULT_BASE_URL,
        }

        timeout = os.getenv(TIMEOUT_ENV)
        if timeout:
            try:
                values["timeout"] = float(timeout)
            except ValueError as e:
                raise ValidationError(
                    f"{TIMEOUT_ENV} must be a number, got {timeout!r}"
                ) from e

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def validate(self) -> None:
        """校验配置。

        Raises:
            ValidationError: 缺少 API 密钥或参数无效。
        """
        if not self.api_key or not self.api_key.strip():
            raise ValidationError("API key is required", ErrorCode.MISSING_API_KEY)

        if not self.base_url:
            raise ValidationError("base_url must be a non-empty string")

        if self.timeout is not None and self.timeout <= 0:
            raise ValidationError(f"timeout must be positive, got {self.timeout}")

    @property
    def normalized_base_url(self) -> str:
        """去掉末尾斜杠的端点。"""
        return self.base_url.rstrip("/")

    def to_dict(self) -> dict[str, Any]:
        """转换为字典, API 密钥会被遮盖。"""
        return {
            "api_key": "***" if self.api_key else "",
            "base_url": self.base_url,
            "timeout": self.timeout,
            "user_agent": self.user_agent,
        }
