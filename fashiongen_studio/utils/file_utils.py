"""File handling utilities"""

import json
import os
import tempfile
from typing import List, Dict, Optional
from datetime import datetime
from PIL.PngImagePlugin import PngInfo

from ..config import get_settings
from .image_utils import data_uri_to_image


def save_conversation(history: List[Dict]) -> str:
    """
    Save conversation history to JSON file

    Args:
        history: Conversation history list

    Returns:
        Path to saved file
    """
    # Create temporary file for download
    temp_file = tempfile.NamedTemporaryFile(
        mode='w',
        prefix='conversation_',
        suffix='.json',
        delete=False,
        encoding='utf-8'
    )

    json.dump(history, temp_file, ensure_ascii=False, indent=2)
    temp_file.close()

    return temp_file.name


def save_generated_image(
    data_uri: str,
    description: str,
    filename: Optional[str] = None
) -> str:
    """
    Save a generated image with metadata to the export directory

    Args:
        data_uri: Image as a data-URI
        description: Prompt or description stored in the PNG text chunks
        filename: Optional filename

    Returns:
        Path to saved file
    """
    settings = get_settings()
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]  # millisecond precision

    if filename is None:
        filename = f"fashiongen_{timestamp}.png"

    metadata = PngInfo()
    metadata.add_text("Description", description)
    metadata.add_text("Generated", timestamp)

    path = os.path.join(settings.export_dir, filename)
    image = data_uri_to_image(data_uri)
    image.save(path, "PNG", pnginfo=metadata)
    return path
