"""
FashionGen Studio
Fashion image generation, editing and analysis with Google's Gemini API
"""

__version__ = "1.0.0"
__author__ = "FashionGen Studio Team"

from .core import (
    AspectRatio,
    ImageResolution,
    ReferenceImages,
    FashionImageService,
    NoImageGenerated,
    NoEditedImageGenerated,
    generate_fashion_image,
    edit_fashion_image,
    analyze_image,
    create_chat_session,
)

__all__ = [
    "AspectRatio",
    "ImageResolution",
    "ReferenceImages",
    "FashionImageService",
    "NoImageGenerated",
    "NoEditedImageGenerated",
    "generate_fashion_image",
    "edit_fashion_image",
    "analyze_image",
    "create_chat_session",
]
