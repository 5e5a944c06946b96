"""测试 client/client.py - 统一客户端。"""

import pytest

from alle_ai.alle_ai_sdk.src.client import AlleAIClient
from alle_ai.alle_ai_sdk.src.core.config import DEFAULT_BASE_URL, ClientConfig
from alle_ai.alle_ai_sdk.src.core.error import ValidationError
from alle_ai.alle_ai_sdk.src.modules import AudioAPI, ChatAPI, ImageAPI, VideoAPI
from alle_ai.alle_ai_sdk.src.transport.http import HttpTransport


class TestAlleAIClient:
    """测试 AlleAIClient。"""

    def test_missing_api_key(self) -> None:
        """测试缺少 API 密钥。"""
        with pytest.raises(ValidationError) as exc_info:
            AlleAIClient()
        assert exc_info.value.code == "MISSING_API_KEY"
        assert exc_info.value.message == "API key is required"

    def test_empty_api_key(self) -> None:
        """测试空字符串密钥。"""
        with pytest.raises(ValidationError, match="API key is required"):
            AlleAIClient(api_key="")

    def test_default_transport(self) -> None:
        """测试默认使用 HTTP 传输层。"""
        client = AlleAIClient(api_key="key")
        assert isinstance(client.transport, HttpTransport)
        assert client.config.base_url == DEFAULT_BASE_URL

    def test_modules_share_transport(self, transport) -> None:
        """测试所有模块共享同一个传输层。"""
        client = AlleAIClient(api_key="key", transport=transport)
        assert isinstance(client.chat, ChatAPI)
        assert isinstance(client.image, ImageAPI)
        assert isinstance(client.audio, AudioAPI)
        assert isinstance(client.video, VideoAPI)
        for module in (client.chat, client.image, client.audio, client.video):
            assert module.transport is transport

    def test_custom_settings(self) -> None:
        """测试自定义端点与超时。"""
        client = AlleAIClient(
            api_key="key", base_url="https://proxy.example.com/v1", timeout=30
        )
        assert client.config.base_url == "https://proxy.example.com/v1"
        assert client.config.timeout == 30

    def test_explicit_config(self) -> None:
        """测试直接传入配置。"""
        config = ClientConfig(api_key="key", timeout=10)
        client = AlleAIClient(config=config)
        assert client.config is config

    def test_invalid_config(self) -> None:
        """测试非法配置。"""
        with pytest.raises(ValidationError, match="timeout"):
            AlleAIClient(config=ClientConfig(api_key="key", timeout=0))

    def test_repr_hides_key(self) -> None:
        """测试 repr 不包含密钥。"""
        text = repr(AlleAIClient(api_key="secret-key"))
        assert "AlleAIClient" in text
        assert "secret-key" not in text

    def test_from_env(self, monkeypatch, transport) -> None:
        """测试从环境变量创建。"""
        monkeypatch.setenv("ALLEAI_API_KEY", "env-key")
        monkeypatch.delenv("ALLEAI_BASE_URL", raising=False)
        monkeypatch.delenv("ALLEAI_TIMEOUT", raising=False)
        client = AlleAIClient.from_env(transport=transport)
        assert client.config.api_key == "env-key"
        assert client.transport is transport

    def test_from_env_missing_key(self, monkeypatch) -> None:
        """测试环境变量中缺少密钥。"""
        monkeypatch.delenv("ALLEAI_API_KEY", raising=False)
        with pytest.raises(ValidationError, match="API key is required"):
            AlleAIClient.from_env()

    @pytest.mark.asyncio
    async def test_async_context_manager(self, transport) -> None:
        """测试异步上下文管理器关闭传输层。"""
        async with AlleAIClient(api_key="key", transport=transport) as client:
            assert client.transport is transport
        assert transport.closed is True

    @pytest.mark.asyncio
    async def test_end_to_end_with_recording_transport(
        self, transport, sample_messages
    ) -> None:
        """测试通过客户端发送请求。"""
        transport.response = {"responses": {"gpt-4o": "Photosynthesis is..."}}
        client = AlleAIClient(api_key="key", transport=transport)

        result = await client.chat.completions(
            models=["gpt-4o"], messages=sample_messages
        )

        assert result == {"responses": {"gpt-4o": "Photosynthesis is..."}}
        assert transport.calls[0][1] == "/chat/completions"
