"""Assistant conversation management"""

import logging
from typing import List, Dict, Optional
from datetime import datetime

from .generator import FashionImageService, get_service

logger = logging.getLogger(__name__)


class AssistantConversation:
    """Pair a Gemini chat session with a displayable message history"""

    def __init__(self, service: Optional[FashionImageService] = None):
        """Start a new chat session with an empty history"""
        self.service = service or get_service()
        self.chat = self.service.create_chat_session()
        self.history: List[Dict] = []

    def add_message(self, role: str, content: str) -> List[Dict]:
        """
        Add a message to conversation history

        Args:
            role: 'user' or 'assistant'
            content: Text content of the message

        Returns:
            Updated history list
        """
        self.history.append({
            "role": role,
            "content": content,
            "timestamp": datetime.now().isoformat()
        })
        return self.history

    async def send(self, message: str) -> str:
        """
        Send a user message to the assistant

        Args:
            message: User message text

        Returns:
            Assistant reply text
        """
        self.add_message("user", message)
        logger.debug("Sending chat message (%d chars)", len(message))

        response = await self.chat.send_message(message)
        reply = response.text or ""

        self.add_message("assistant", reply)
        return reply

    def clear_history(self) -> List[Dict]:
        """Clear history and start a fresh chat session"""
        self.chat = self.service.create_chat_session()
        self.history = []
        return self.history

    def get_history(self) -> List[Dict]:
        """Get current history"""
        return self.history

    def get_display_history(self) -> List[Dict]:
        """History in the role/content format used by the chatbot widget"""
        return [{"role": msg["role"], "content": msg["content"]} for msg in self.history]
