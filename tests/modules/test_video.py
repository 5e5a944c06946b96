"""测试 modules/video.py - 视频模块。"""

import pytest

from alle_ai.alle_ai_sdk.src.core.error import ValidationError
from alle_ai.alle_ai_sdk.src.modules.video import VideoAPI


class TestVideoGenerate:
    """测试视频生成。"""

    @pytest.mark.asyncio
    async def test_defaults(self, transport) -> None:
        """测试默认参数。"""
        await VideoAPI(transport).generate(models=["nova-reel"], prompt="a sunset")

        kind, endpoint, body = transport.calls[0]
        assert (kind, endpoint) == ("json", "/video/generate")
        assert body == {
            "models": ["nova-reel"],
            "prompt": "a sunset",
            "duration": 6,
            "loop": False,
            "aspect_ratio": "16:9",
            "fps": 24,
            "model_specific_params": {},
        }

    @pytest.mark.asyncio
    async def test_optional_fields(self, transport) -> None:
        """测试可选字段。"""
        await VideoAPI(transport).generate(
            models=["nova-reel"],
            prompt="a sunset",
            dimension="1280x720",
            resolution="720p",
            seed=7,
            loop=True,
        )
        body = transport.calls[0][2]
        assert body["dimension"] == "1280x720"
        assert body["resolution"] == "720p"
        assert body["seed"] == 7
        assert body["loop"] is True

    @pytest.mark.asyncio
    async def test_unknown_fields_not_sent(self, transport) -> None:
        """测试只发送已知字段。"""
        await VideoAPI(transport).generate(
            models=["nova-reel"], prompt="a sunset", width=1024, bogus=True
        )
        body = transport.calls[0][2]
        assert "width" not in body
        assert "bogus" not in body
        assert set(body) == {
            "models",
            "prompt",
            "duration",
            "loop",
            "aspect_ratio",
            "fps",
            "model_specific_params",
        }

    @pytest.mark.asyncio
    async def test_none_fields_omitted(self, transport) -> None:
        """测试 None 字段不出现在请求体中。"""
        await VideoAPI(transport).generate(
            models=["nova-reel"], prompt="a sunset", seed=None, dimension=None
        )
        body = transport.calls[0][2]
        assert "seed" not in body
        assert "dimension" not in body

    @pytest.mark.asyncio
    async def test_invalid_aspect_ratio(self, transport) -> None:
        """测试非法比例时不发送请求。"""
        with pytest.raises(ValidationError, match="aspect_ratio must be in the format"):
            await VideoAPI(transport).generate(
                models=["nova-reel"], prompt="a sunset", aspect_ratio="wide"
            )
        assert transport.calls == []


class TestVideoStatus:
    """测试任务状态查询。"""

    @pytest.mark.asyncio
    async def test_not_available(self, transport) -> None:
        """测试固定返回不可用。"""
        result = await VideoAPI(transport).get_video_status("req_123")
        assert result == {
            "status": "not available",
            "message": "This feature is not available yet",
        }
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_empty_request_id(self, transport) -> None:
        """测试空任务 ID。"""
        with pytest.raises(ValidationError, match="request_id must be a non-empty string"):
            await VideoAPI(transport).get_video_status("")
