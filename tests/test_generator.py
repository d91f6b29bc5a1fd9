import asyncio

import pytest

from fashiongen_studio.core import (
    AspectRatio,
    ImageResolution,
    NoEditedImageGenerated,
    NoImageGenerated,
    ReferenceImages,
)
from fashiongen_studio.core.generator import (
    ANALYSIS_EMPTY,
    ANALYSIS_FAILED,
    ANALYSIS_INSTRUCTION,
    BACKGROUND_LABEL,
    MASK_GUIDANCE,
    MODEL_LABEL,
    PRODUCT_LABEL,
    SYSTEM_INSTRUCTION,
    build_edit_parts,
    build_generation_parts,
    build_image_config,
    extract_image_data_uri,
)
from fashiongen_studio.core.parts import InlinePart, TextPart
from tests.conftest import inline_part, make_response, text_part

PRODUCT = "data:image/jpeg;base64,cHJvZHVjdA=="
MODEL = "data:image/webp;base64,bW9kZWw="
BACKGROUND = "YmFja2dyb3VuZA=="


class TestBuildGenerationParts:
    """Test suite for generation part ordering."""

    def test_no_references(self):
        """Only the instruction text is sent without references."""
        parts = build_generation_parts("red dress", {})
        assert parts == [TextPart("Instructions: red dress")]

    def test_none_references(self):
        """Missing references behave like an empty set."""
        assert build_generation_parts("red dress", None) == [TextPart("Instructions: red dress")]

    def test_product_only(self):
        """A product reference is labelled and precedes the instructions."""
        parts = build_generation_parts("red dress", {"product": PRODUCT})
        assert parts == [
            TextPart(PRODUCT_LABEL),
            InlinePart("image/jpeg", "cHJvZHVjdA=="),
            TextPart("Instructions: red dress"),
        ]

    def test_all_references_in_fixed_order(self):
        """Product, model and background keep their order regardless of input order."""
        references = {"background": BACKGROUND, "model": MODEL, "product": PRODUCT}
        parts = build_generation_parts("campaign shot", references)
        assert parts == [
            TextPart(PRODUCT_LABEL),
            InlinePart("image/jpeg", "cHJvZHVjdA=="),
            TextPart(MODEL_LABEL),
            InlinePart("image/webp", "bW9kZWw="),
            TextPart(BACKGROUND_LABEL),
            InlinePart("image/png", "YmFja2dyb3VuZA=="),
            TextPart("Instructions: campaign shot"),
        ]

    def test_dataclass_references(self):
        """ReferenceImages works the same as a mapping."""
        parts = build_generation_parts("look", ReferenceImages(model=MODEL))
        assert [type(p) for p in parts] == [TextPart, InlinePart, TextPart]
        assert parts[0].text == MODEL_LABEL


class TestBuildEditParts:
    """Test suite for edit part ordering."""

    def test_without_mask(self):
        """Image first, raw prompt last, no guidance text."""
        parts = build_edit_parts(PRODUCT, "Add a retro filter")
        assert parts == [InlinePart("image/jpeg", "cHJvZHVjdA=="), TextPart("Add a retro filter")]

    def test_with_mask(self):
        """Guidance text sits between the mask image and the prompt."""
        parts = build_edit_parts(PRODUCT, "Remove the person", MODEL)
        assert parts == [
            InlinePart("image/jpeg", "cHJvZHVjdA=="),
            InlinePart("image/webp", "bW9kZWw="),
            TextPart(MASK_GUIDANCE),
            TextPart("Remove the person"),
        ]


class TestBuildImageConfig:
    """Test suite for model-dependent image config."""

    def test_flash_omits_image_size(self):
        config = build_image_config("1:1", "4K", "2.5")
        assert config.image_config.aspect_ratio == "1:1"
        assert config.image_config.image_size is None

    def test_pro_includes_image_size(self):
        config = build_image_config("16:9", "2K", "3")
        assert config.image_config.aspect_ratio == "16:9"
        assert config.image_config.image_size == "2K"

    def test_enum_values(self):
        config = build_image_config(AspectRatio.PORTRAIT_9_16, ImageResolution.RES_4K, "3")
        assert config.image_config.aspect_ratio == "9:16"
        assert config.image_config.image_size == "4K"


class TestExtractImageDataUri:
    """Test suite for response decoding."""

    def test_first_inline_part_wins(self):
        response = make_response(parts=[text_part("here"), inline_part("first"), inline_part("second")])
        assert extract_image_data_uri(response) == "data:image/png;base64,first"

    def test_bytes_payload_is_encoded(self):
        response = make_response(parts=[inline_part(b"hello", "image/jpeg")])
        assert extract_image_data_uri(response) == "data:image/png;base64,aGVsbG8="

    def test_no_candidates(self):
        assert extract_image_data_uri(make_response(candidates=False)) is None

    def test_no_content(self):
        assert extract_image_data_uri(make_response(parts=None)) is None

    def test_text_only(self):
        assert extract_image_data_uri(make_response(parts=[text_part("sorry")])) is None


class TestGenerateFashionImage:
    """Test suite for FashionImageService.generate_fashion_image."""

    def test_flash_end_to_end(self, service, fake_client):
        """Default version uses the Flash model with a single instruction part."""
        fake_client.aio.models.response = make_response(parts=[inline_part("abc123")])

        result = asyncio.run(service.generate_fashion_image("red dress", "1:1", "1K", {}, "2.5"))

        assert result == "data:image/png;base64,abc123"
        assert len(fake_client.calls) == 1
        call = fake_client.calls[0]
        assert call["model"] == "gemini-2.5-flash-image"
        assert [p.text for p in call["contents"].parts] == ["Instructions: red dress"]
        assert call["config"].image_config.aspect_ratio == "1:1"
        assert call["config"].image_config.image_size is None

    def test_default_version_is_flash(self, service, fake_client):
        fake_client.aio.models.response = make_response(parts=[inline_part("abc")])
        asyncio.run(service.generate_fashion_image("look", "3:4", "2K"))
        assert fake_client.calls[0]["model"] == "gemini-2.5-flash-image"

    def test_pro_version(self, service, fake_client):
        """Version '3' selects the Pro model and sends the resolution."""
        fake_client.aio.models.response = make_response(parts=[inline_part("xyz")])

        asyncio.run(service.generate_fashion_image("look", "4:5", "4K", {}, "3"))

        call = fake_client.calls[0]
        assert call["model"] == "gemini-3-pro-image-preview"
        assert call["config"].image_config.image_size == "4K"

    def test_reference_bytes_are_sent(self, service, fake_client):
        fake_client.aio.models.response = make_response(parts=[inline_part("xyz")])

        asyncio.run(service.generate_fashion_image("look", "1:1", "1K", {"product": PRODUCT}))

        parts = fake_client.calls[0]["contents"].parts
        assert parts[0].text == PRODUCT_LABEL
        assert parts[1].inline_data.mime_type == "image/jpeg"
        assert parts[1].inline_data.data == b"product"
        assert parts[2].text == "Instructions: look"

    def test_no_image_raises(self, service, fake_client):
        fake_client.aio.models.response = make_response(parts=[text_part("I cannot do that")])
        with pytest.raises(NoImageGenerated, match="No image generated."):
            asyncio.run(service.generate_fashion_image("look", "1:1", "1K"))

    def test_no_candidates_raises(self, service, fake_client):
        fake_client.aio.models.response = make_response(candidates=False)
        with pytest.raises(NoImageGenerated):
            asyncio.run(service.generate_fashion_image("look", "1:1", "1K"))

    def test_service_error_propagates(self, service, fake_client, caplog):
        """Transport errors are logged and re-raised unchanged."""
        error = ConnectionError("network down")
        fake_client.aio.models.error = error

        with pytest.raises(ConnectionError) as excinfo:
            asyncio.run(service.generate_fashion_image("look", "1:1", "1K"))

        assert excinfo.value is error
        assert "Gemini Generation Error" in caplog.text


class TestEditFashionImage:
    """Test suite for FashionImageService.edit_fashion_image."""

    def test_edit_without_mask(self, service, fake_client):
        fake_client.aio.models.response = make_response(parts=[inline_part(b"edited")])

        result = asyncio.run(service.edit_fashion_image(PRODUCT, "Add a retro filter"))

        assert result == "data:image/png;base64,ZWRpdGVk"
        call = fake_client.calls[0]
        assert call["model"] == "gemini-2.5-flash-image"
        assert "config" not in call
        parts = call["contents"].parts
        assert len(parts) == 2
        assert parts[0].inline_data.data == b"product"
        assert parts[1].text == "Add a retro filter"

    def test_edit_with_mask(self, service, fake_client):
        fake_client.aio.models.response = make_response(parts=[inline_part("ok")])

        asyncio.run(service.edit_fashion_image(PRODUCT, "Remove the person", MODEL))

        parts = fake_client.calls[0]["contents"].parts
        assert len(parts) == 4
        assert parts[1].inline_data.mime_type == "image/webp"
        assert parts[2].text == MASK_GUIDANCE
        assert parts[3].text == "Remove the person"

    def test_no_image_raises(self, service, fake_client):
        fake_client.aio.models.response = make_response(parts=[])
        with pytest.raises(NoEditedImageGenerated, match="No edited image generated."):
            asyncio.run(service.edit_fashion_image(PRODUCT, "edit"))

    def test_service_error_propagates(self, service, fake_client, caplog):
        fake_client.aio.models.error = RuntimeError("403 PERMISSION_DENIED")
        with pytest.raises(RuntimeError, match="PERMISSION_DENIED"):
            asyncio.run(service.edit_fashion_image(PRODUCT, "edit"))
        assert "Gemini Edit Error" in caplog.text


class TestAnalyzeImage:
    """Test suite for FashionImageService.analyze_image."""

    def test_returns_text(self, service, fake_client):
        fake_client.aio.models.response = make_response(text="A structured wool blazer.")

        result = asyncio.run(service.analyze_image(PRODUCT))

        assert result == "A structured wool blazer."
        call = fake_client.calls[0]
        assert call["model"] == "gemini-3-pro-preview"
        parts = call["contents"].parts
        assert parts[0].inline_data.mime_type == "image/jpeg"
        assert parts[1].text == ANALYSIS_INSTRUCTION

    def test_empty_text(self, service, fake_client):
        fake_client.aio.models.response = make_response(text=None)
        assert asyncio.run(service.analyze_image(PRODUCT)) == ANALYSIS_EMPTY

    def test_errors_are_swallowed(self, service, fake_client, caplog):
        """Any failure becomes the fallback message."""
        fake_client.aio.models.error = ConnectionError("network down")

        result = asyncio.run(service.analyze_image(PRODUCT))

        assert result == "Analysis failed. Please try again."
        assert result == ANALYSIS_FAILED
        assert "Gemini Analysis Error" in caplog.text


class TestCreateChatSession:
    """Test suite for FashionImageService.create_chat_session."""

    def test_uses_persona(self, service, fake_client):
        chat = service.create_chat_session()

        assert fake_client.aio.chats.created == [chat]
        assert chat.model == "gemini-3-pro-preview"
        assert chat.config.system_instruction == SYSTEM_INSTRUCTION
        assert fake_client.calls == []

    def test_each_call_creates_a_new_session(self, service, fake_client):
        assert service.create_chat_session() is not service.create_chat_session()
        assert len(fake_client.aio.chats.created) == 2


class TestModelSelection:
    """Test suite for configurable model identifiers."""

    def test_overridden_models(self, fake_client, tmp_path):
        from fashiongen_studio.config import Settings
        from fashiongen_studio.core import FashionImageService

        settings = Settings(
            gemini_api_key="k",
            generation_model_flash="flash-x",
            generation_model_pro="pro-x",
            export_dir=str(tmp_path),
        )
        service = FashionImageService(client=fake_client, settings=settings)

        assert service.select_generation_model("2.5") == "flash-x"
        assert service.select_generation_model("3") == "pro-x"
        assert service.select_generation_model("anything") == "flash-x"
