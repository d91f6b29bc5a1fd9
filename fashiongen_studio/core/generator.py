"""Gemini API request adapter for fashion image generation, editing, analysis and chat"""

import base64
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Union

from google.genai import types

from ..config import Settings, get_settings
from ..utils.image_utils import to_data_uri
from .client import get_client
from .errors import NoEditedImageGenerated, NoImageGenerated
from .parts import InlinePart, RequestPart, TextPart, to_content

logger = logging.getLogger(__name__)


class AspectRatio(str, Enum):
    """Aspect ratios accepted by the Gemini image models"""

    SQUARE = "1:1"
    PORTRAIT_2_3 = "2:3"
    LANDSCAPE_3_2 = "3:2"
    PORTRAIT_3_4 = "3:4"
    LANDSCAPE_4_3 = "4:3"
    PORTRAIT_4_5 = "4:5"
    LANDSCAPE_5_4 = "5:4"
    PORTRAIT_9_16 = "9:16"
    LANDSCAPE_16_9 = "16:9"
    ULTRAWIDE_21_9 = "21:9"


class ImageResolution(str, Enum):
    """Output sizes, honoured only by the Gemini 3 Pro image model"""

    RES_1K = "1K"
    RES_2K = "2K"
    RES_4K = "4K"


MODEL_VERSION_FLASH = "2.5"
MODEL_VERSION_PRO = "3"

PRODUCT_LABEL = "Primary Product Reference (The garment/item to feature):"
MODEL_LABEL = "Model Reference (Person/Pose style):"
BACKGROUND_LABEL = "Background/Scene Reference:"
MASK_GUIDANCE = "Use the provided sketch/mask image as a guide for the edit."
ANALYSIS_INSTRUCTION = (
    "Analyze this fashion image. Describe the garment style, material, color, "
    "and key details in a concise paragraph suitable for a fashion catalog."
)
ANALYSIS_EMPTY = "Could not analyze image."
ANALYSIS_FAILED = "Analysis failed. Please try again."
SYSTEM_INSTRUCTION = (
    "You are an expert Fashion Director and AI Technical Assistant. You help users "
    "design outfits, suggest campaign ideas, and troubleshoot the FashionGen Studio app. "
    "Keep answers professional, chic, and concise."
)


@dataclass
class ReferenceImages:
    """Optional reference images, each a data-URI"""

    product: Optional[str] = None
    model: Optional[str] = None
    background: Optional[str] = None

    @classmethod
    def coerce(cls, references: Union["ReferenceImages", Dict[str, str], None]) -> "ReferenceImages":
        if references is None:
            return cls()
        if isinstance(references, cls):
            return references
        return cls(**references)


def _enum_value(value):
    return value.value if isinstance(value, Enum) else value


def build_generation_parts(
    prompt: str,
    references: Union[ReferenceImages, Dict[str, str], None] = None
) -> List[RequestPart]:
    """
    Build the ordered part sequence for a generation request

    Each present reference contributes a label followed by its image, in the
    order product, model, background. The instruction text is always last.
    """
    references = ReferenceImages.coerce(references)
    parts: List[RequestPart] = []

    for label, uri in (
        (PRODUCT_LABEL, references.product),
        (MODEL_LABEL, references.model),
        (BACKGROUND_LABEL, references.background),
    ):
        if uri:
            parts.append(TextPart(label))
            parts.append(InlinePart.from_data_uri(uri))

    parts.append(TextPart(f"Instructions: {prompt}"))
    return parts


def build_edit_parts(
    image_data_uri: str,
    prompt: str,
    mask_data_uri: Optional[str] = None
) -> List[RequestPart]:
    """Build the ordered part sequence for an edit request"""
    parts: List[RequestPart] = [InlinePart.from_data_uri(image_data_uri)]

    if mask_data_uri:
        parts.append(InlinePart.from_data_uri(mask_data_uri))
        parts.append(TextPart(MASK_GUIDANCE))

    parts.append(TextPart(prompt))
    return parts


def build_analysis_parts(image_data_uri: str) -> List[RequestPart]:
    """Build the two-part analysis request"""
    return [InlinePart.from_data_uri(image_data_uri), TextPart(ANALYSIS_INSTRUCTION)]


def build_image_config(
    aspect_ratio: Union[AspectRatio, str],
    resolution: Union[ImageResolution, str],
    model_version: str = MODEL_VERSION_FLASH
) -> types.GenerateContentConfig:
    """Image config for generation; the resolution only applies to the Pro model"""
    image_config = {"aspect_ratio": _enum_value(aspect_ratio)}
    if model_version == MODEL_VERSION_PRO:
        image_config["image_size"] = _enum_value(resolution)
    return types.GenerateContentConfig(image_config=types.ImageConfig(**image_config))


def extract_image_data_uri(response) -> Optional[str]:
    """
    Return the first inline image of the first candidate as a PNG data-URI

    The MIME type reported by the service is discarded.
    """
    if not response.candidates:
        return None
    content = response.candidates[0].content
    if content is None or not content.parts:
        return None

    for part in content.parts:
        inline_data = getattr(part, "inline_data", None)
        if inline_data and inline_data.data:
            raw = inline_data.data
            payload = base64.b64encode(raw).decode("utf-8") if isinstance(raw, bytes) else raw
            return to_data_uri(payload, "image/png")
    return None


class FashionImageService:
    """Formats requests for the Gemini API and decodes its responses"""

    def __init__(self, client=None, settings: Optional[Settings] = None):
        """
        Args:
            client: google-genai client; the shared client is used when omitted
            settings: Application settings; the singleton is used when omitted
        """
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_client()
        return self._client

    def select_generation_model(self, model_version: str = MODEL_VERSION_FLASH) -> str:
        """Pick the image model for a version selector ('2.5' or '3')"""
        if model_version == MODEL_VERSION_PRO:
            return self.settings.generation_model_pro
        return self.settings.generation_model_flash

    async def generate_fashion_image(
        self,
        prompt: str,
        aspect_ratio: Union[AspectRatio, str],
        resolution: Union[ImageResolution, str],
        references: Union[ReferenceImages, Dict[str, str], None] = None,
        model_version: str = MODEL_VERSION_FLASH
    ) -> str:
        """
        Generate a fashion image from a prompt and optional reference images

        Args:
            prompt: Text instructions
            aspect_ratio: Output aspect ratio
            resolution: Output size, ignored unless model_version is '3'
            references: Optional product, model and background images
            model_version: '2.5' (Flash) or '3' (Pro)

        Returns:
            Generated image as a PNG data-URI

        Raises:
            NoImageGenerated: The response held no inline image
        """
        try:
            parts = build_generation_parts(prompt, references)
            model = self.select_generation_model(model_version)
            config = build_image_config(aspect_ratio, resolution, model_version)

            logger.info(
                "Generating image: model=%s, aspect_ratio=%s, image_size=%s, parts=%d",
                model,
                config.image_config.aspect_ratio,
                config.image_config.image_size,
                len(parts),
            )

            response = await self.client.aio.models.generate_content(
                model=model,
                contents=to_content(parts),
                config=config,
            )

            image = extract_image_data_uri(response)
            if image is None:
                raise NoImageGenerated()
            return image
        except Exception as e:
            logger.error("Gemini Generation Error: %s", e)
            raise

    async def edit_fashion_image(
        self,
        image_data_uri: str,
        prompt: str,
        mask_data_uri: Optional[str] = None
    ) -> str:
        """
        Edit an existing image, optionally guided by a sketch/mask

        Args:
            image_data_uri: Image to edit
            prompt: Edit instructions, sent as-is
            mask_data_uri: Optional sketch/mask image

        Returns:
            Edited image as a PNG data-URI

        Raises:
            NoEditedImageGenerated: The response held no inline image
        """
        try:
            parts = build_edit_parts(image_data_uri, prompt, mask_data_uri)
            logger.info(
                "Editing image: model=%s, mask=%s",
                self.settings.edit_model,
                bool(mask_data_uri),
            )

            response = await self.client.aio.models.generate_content(
                model=self.settings.edit_model,
                contents=to_content(parts),
            )

            image = extract_image_data_uri(response)
            if image is None:
                raise NoEditedImageGenerated()
            return image
        except Exception as e:
            logger.error("Gemini Edit Error: %s", e)
            raise

    async def analyze_image(self, image_data_uri: str) -> str:
        """Describe a garment image; never raises, returns a fallback message instead"""
        try:
            response = await self.client.aio.models.generate_content(
                model=self.settings.analysis_model,
                contents=to_content(build_analysis_parts(image_data_uri)),
            )
            return response.text or ANALYSIS_EMPTY
        except Exception as e:
            logger.error("Gemini Analysis Error: %s", e)
            return ANALYSIS_FAILED

    def create_chat_session(self):
        """Start a new assistant chat with the studio persona"""
        return self.client.aio.chats.create(
            model=self.settings.chat_model,
            config=types.GenerateContentConfig(system_instruction=SYSTEM_INSTRUCTION),
        )


# Singleton instance
_service = None


def get_service() -> FashionImageService:
    """Get the default service bound to the shared client"""
    global _service
    if _service is None:
        _service = FashionImageService()
    return _service


async def generate_fashion_image(
    prompt: str,
    aspect_ratio: Union[AspectRatio, str],
    resolution: Union[ImageResolution, str],
    references: Union[ReferenceImages, Dict[str, str], None] = None,
    model_version: str = MODEL_VERSION_FLASH
) -> str:
    return await get_service().generate_fashion_image(
        prompt, aspect_ratio, resolution, references, model_version
    )


async def edit_fashion_image(
    image_data_uri: str,
    prompt: str,
    mask_data_uri: Optional[str] = None
) -> str:
    return await get_service().edit_fashion_image(image_data_uri, prompt, mask_data_uri)


async def analyze_image(image_data_uri: str) -> str:
    return await get_service().analyze_image(image_data_uri)


def create_chat_session():
    return get_service().create_chat_session()
