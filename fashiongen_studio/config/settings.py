"""Configuration settings for FashionGen Studio"""

import os
from typing import Optional
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent.parent
env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)
else:
    # Try loading from current working directory
    load_dotenv()


@dataclass
class Settings:
    """Application settings"""

    # API Configuration
    gemini_api_key: Optional[str] = None

    # Model identifiers
    generation_model_flash: str = "gemini-2.5-flash-image"
    generation_model_pro: str = "gemini-3-pro-image-preview"
    edit_model: str = "gemini-2.5-flash-image"
    analysis_model: str = "gemini-3-pro-preview"
    chat_model: str = "gemini-3-pro-preview"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 7860
    share: bool = False
    log_level: str = "INFO"

    # File Storage
    export_dir: str = "./exports"

    def __post_init__(self):
        # Get settings from environment variables if not set
        if not self.gemini_api_key:
            self.gemini_api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")

        # Override with environment variables if they exist
        self.generation_model_flash = os.environ.get("GENERATION_MODEL_FLASH", self.generation_model_flash)
        self.generation_model_pro = os.environ.get("GENERATION_MODEL_PRO", self.generation_model_pro)
        self.edit_model = os.environ.get("EDIT_MODEL", self.edit_model)
        self.analysis_model = os.environ.get("ANALYSIS_MODEL", self.analysis_model)
        self.chat_model = os.environ.get("CHAT_MODEL", self.chat_model)

        self.host = os.environ.get("HOST", self.host)
        self.port = int(os.environ.get("PORT", str(self.port)))
        self.share = os.environ.get("SHARE", str(self.share)).lower() == "true"
        self.log_level = os.environ.get("LOG_LEVEL", self.log_level).upper()

        self.export_dir = os.environ.get("EXPORT_DIR", self.export_dir)

        # Create directories if they don't exist
        os.makedirs(self.export_dir, exist_ok=True)

    def validate(self) -> bool:
        """Validate settings"""
        if not self.gemini_api_key:
            raise ValueError("GEMINI_API_KEY is not set")
        return True


# Singleton instance
_settings = None


def get_settings() -> Settings:
    """Get application settings singleton"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
