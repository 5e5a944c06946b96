"""Client 模块 - SDK 入口。"""

from .client import AlleAIClient

__all__ = ["AlleAIClient"]
