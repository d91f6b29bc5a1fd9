"""Core Gemini request adapter"""

from .errors import FashionGenError, NoImageGenerated, NoEditedImageGenerated
from .generator import (
    AspectRatio,
    ImageResolution,
    ReferenceImages,
    FashionImageService,
    get_service,
    generate_fashion_image,
    edit_fashion_image,
    analyze_image,
    create_chat_session,
)
from .conversation import AssistantConversation

__all__ = [
    "FashionGenError",
    "NoImageGenerated",
    "NoEditedImageGenerated",
    "AspectRatio",
    "ImageResolution",
    "ReferenceImages",
    "FashionImageService",
    "get_service",
    "generate_fashion_image",
    "edit_fashion_image",
    "analyze_image",
    "create_chat_session",
    "AssistantConversation",
]
