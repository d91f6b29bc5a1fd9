"""Request parts sent to the Gemini API"""

import base64
from dataclasses import dataclass
from typing import Union

from google.genai import types

from ..utils.image_utils import decode_data_uri


@dataclass(frozen=True)
class TextPart:
    """Plain text element of a request"""

    text: str

    def to_genai(self) -> types.Part:
        return types.Part.from_text(text=self.text)


@dataclass(frozen=True)
class InlinePart:
    """Inline binary element of a request: MIME type plus base64 payload"""

    mime_type: str
    data: str

    @classmethod
    def from_data_uri(cls, uri: str) -> "InlinePart":
        mime_type, data = decode_data_uri(uri)
        return cls(mime_type=mime_type, data=data)

    def to_genai(self) -> types.Part:
        return types.Part.from_bytes(
            data=base64.b64decode(self.data),
            mime_type=self.mime_type
        )


RequestPart = Union[TextPart, InlinePart]


def to_content(parts) -> types.Content:
    """Wrap an ordered part sequence as a single user turn"""
    return types.Content(
        role="user",
        parts=[part.to_genai() for part in parts]
    )
