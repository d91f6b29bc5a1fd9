"""Shared Gemini API client"""

import logging

from google import genai

from ..config import get_settings

logger = logging.getLogger(__name__)

# Singleton instance
_client = None


def get_client() -> genai.Client:
    """Get the process-wide Gemini client, creating it on first use"""
    global _client
    if _client is None:
        settings = get_settings()
        logger.debug("Creating Gemini client")
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def reset_client():
    """Drop the cached client so the next call builds a new one"""
    global _client
    _client = None
