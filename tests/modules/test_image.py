"""测试 modules/image.py - 图片模块。"""

from pathlib import Path

import pytest

from alle_ai.alle_ai_sdk.src.core.error import ValidationError
from alle_ai.alle_ai_sdk.src.modules.image import ImageAPI
from alle_ai.alle_ai_sdk.src.transport.files import FileAttachment


class TestImageGenerate:
    """测试图片生成。"""

    @pytest.mark.asyncio
    async def test_defaults(self, transport) -> None:
        """测试默认参数。"""
        await ImageAPI(transport).generate(models=["dall-e-3"], prompt="a red fox")

        kind, endpoint, body = transport.calls[0]
        assert (kind, endpoint) == ("json", "/image/generate")
        assert body == {
            "models": ["dall-e-3"],
            "prompt": "a red fox",
            "width": 1024,
            "height": 1024,
            "n": 1,
            "style_preset": None,
            "seed": None,
            "model_specific_params": {},
        }

    @pytest.mark.asyncio
    async def test_overrides(self, transport) -> None:
        """测试覆盖默认参数。"""
        await ImageAPI(transport).generate(
            {"models": ["sdxl"], "prompt": "city", "width": 512},
            n=2,
            style_preset="photographic",
            seed=42,
        )
        _, _, body = transport.calls[0]
        assert body["width"] == 512
        assert body["height"] == 1024
        assert body["n"] == 2
        assert body["style_preset"] == "photographic"
        assert body["seed"] == 42

    @pytest.mark.asyncio
    async def test_unknown_fields_not_sent(self, transport) -> None:
        """测试只发送已知字段。"""
        await ImageAPI(transport).generate(
            models=["dall-e-3"], prompt="p", image_file="/etc/passwd", bogus=1
        )
        assert sorted(transport.calls[0][2]) == [
            "height",
            "model_specific_params",
            "models",
            "n",
            "prompt",
            "seed",
            "style_preset",
            "width",
        ]

    @pytest.mark.asyncio
    async def test_default_params_not_shared(self, transport) -> None:
        """测试默认的 model_specific_params 不在请求之间共享。"""
        image = ImageAPI(transport)
        await image.generate(models=["a"], prompt="x")
        transport.calls[0][2]["model_specific_params"]["mutated"] = True
        await image.generate(models=["a"], prompt="y")
        assert transport.calls[1][2]["model_specific_params"] == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("request_body", "message"),
        [
            ({"models": [], "prompt": "x"}, "models must be a non-empty array of strings"),
            ({"models": ["a"], "prompt": ""}, "prompt must be a non-empty string"),
            ({"models": ["a"], "prompt": "x", "width": 32}, "width must be an integer >= 64"),
            ({"models": ["a"], "prompt": "x", "n": 0}, "n must be an integer >= 1"),
        ],
    )
    async def test_validation_failure_sends_nothing(
        self, transport, request_body, message
    ) -> None:
        """测试校验失败时不发送请求。"""
        with pytest.raises(ValidationError) as exc_info:
            await ImageAPI(transport).generate(request_body)
        assert exc_info.value.message == message
        assert transport.calls == []


class TestImageEdit:
    """测试图片编辑。"""

    @pytest.mark.asyncio
    async def test_multipart_form(self, transport, image_file) -> None:
        """测试表单字段。"""
        await ImageAPI(transport).edit(
            models=["dall-e-2", "sdxl"], prompt="add a hat", image_file=image_file
        )

        kind, endpoint, form = transport.calls[0]
        assert (kind, endpoint) == ("multipart", "/image/edit")
        assert form.field_names() == ["models[0]", "models[1]", "prompt", "image_file"]
        assert form.get_field("prompt") == "add a hat"
        assert form.files[0].filename == "photo.png"
        assert form.files[0].mime_type == "image/png"
        assert form.files[0].content == Path(image_file).read_bytes()

    @pytest.mark.asyncio
    async def test_custom_file_resolver(self, transport) -> None:
        """测试注入的文件解析函数。"""
        resolved = []

        async def resolver(reference, kind):
            resolved.append((reference, kind))
            return FileAttachment(b"img", "remote.jpg", "image/jpeg", reference)

        image = ImageAPI(transport, file_resolver=resolver)
        await image.edit(
            models=["dall-e-2"],
            prompt="blur background",
            image_file="https://cdn.example.com/remote.jpg",
        )
        assert resolved == [("https://cdn.example.com/remote.jpg", "image")]
        assert transport.calls[0][2].files[0].filename == "remote.jpg"

    @pytest.mark.asyncio
    async def test_missing_file_sends_nothing(self, transport, tmp_path) -> None:
        """测试文件不存在时不发送请求。"""
        with pytest.raises(ValidationError, match="Failed to process image file"):
            await ImageAPI(transport).edit(
                models=["dall-e-2"],
                prompt="add a hat",
                image_file=str(tmp_path / "missing.png"),
            )
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_missing_image_file(self, transport) -> None:
        """测试缺少 image_file。"""
        with pytest.raises(ValidationError, match="image_file must be a non-empty string"):
            await ImageAPI(transport).edit(models=["dall-e-2"], prompt="add a hat")
        assert transport.calls == []
