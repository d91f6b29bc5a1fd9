"""Utility functions and helpers"""

from .image_utils import decode_data_uri, to_data_uri, encode_image, image_to_data_uri, data_uri_to_image
from .file_utils import save_conversation, save_generated_image

__all__ = [
    "decode_data_uri",
    "to_data_uri",
    "encode_image",
    "image_to_data_uri",
    "data_uri_to_image",
    "save_conversation",
    "save_generated_image",
]
