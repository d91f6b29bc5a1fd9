"""Errors raised by the Gemini request adapter"""


class FashionGenError(Exception):
    """Base class for FashionGen Studio errors"""

    default_message = "FashionGen Studio error."

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)


class NoImageGenerated(FashionGenError):
    """The generation response carried no inline image"""

    default_message = "No image generated."


class NoEditedImageGenerated(FashionGenError):
    """The edit response carried no inline image"""

    default_message = "No edited image generated."
