"""Image and data-URI utility functions"""

import base64
import io
import re
from typing import Tuple
from PIL import Image

DEFAULT_MIME_TYPE = "image/png"

_DATA_URI_PREFIX = re.compile(r"^data:([^;]+);base64,")


def decode_data_uri(uri: str) -> Tuple[str, str]:
    """
    Split a data-URI into its MIME type and base64 payload

    Strings without a ``data:<mime>;base64,`` prefix are treated as a bare
    payload of the default MIME type. The payload is never validated.

    Args:
        uri: Data-URI or bare base64 string

    Returns:
        Tuple of (mime_type, payload)
    """
    match = _DATA_URI_PREFIX.match(uri)
    if match is None:
        return DEFAULT_MIME_TYPE, uri
    return match.group(1), uri[match.end():]


def to_data_uri(payload: str, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """Wrap a base64 payload as a data-URI"""
    return f"data:{mime_type};base64,{payload}"


def encode_image(image: Image.Image, format: str = "PNG") -> str:
    """
    Encode PIL Image to base64 string

    Args:
        image: PIL Image object
        format: Image format for encoding

    Returns:
        Base64 encoded string
    """
    buffered = io.BytesIO()
    image.save(buffered, format=format)
    return base64.b64encode(buffered.getvalue()).decode()


def image_to_data_uri(image: Image.Image) -> str:
    """Encode PIL Image as a PNG data-URI"""
    return to_data_uri(encode_image(image, format="PNG"), "image/png")


def data_uri_to_image(uri: str) -> Image.Image:
    """
    Decode a data-URI (or bare base64 string) to PIL Image

    Args:
        uri: Data-URI string

    Returns:
        PIL Image object
    """
    _, payload = decode_data_uri(uri)
    img_data = base64.b64decode(payload)
    return Image.open(io.BytesIO(img_data))
