"""
Configuration module for Telegram Appointment Bot.
Loads environment variables and provides typed configuration.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(dotenv_path=env_path)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot
    bot_token: str

    # Supabase
    supabase_url: str
    supabase_key: str
    appointments_table: str = "appointments"

    # Operator chat that receives every new booking
    admin_chat_id: str

    # Reverse geocoding (OpenStreetMap Nominatim)
    geocoder_url: str = "https://nominatim.openstreetmap.org"
    geocoder_user_agent: str = "TelegramAppointmentBot/1.0"
    geocoder_timeout: float = 10.0

    # Bot Settings
    contact_phone: str = "+998-93-804-30-90"

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Webhook Configuration
    bot_webhook_url: Optional[str] = (
        None  # Full webhook URL for bot (e.g., https://yourdomain.com/webhook/telegram)
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def validate_all_required(self) -> None:
        """
        Validate that all required settings are present.

        Raises:
            ValueError: If required fields are missing or invalid
        """
        required_fields = [
            "bot_token",
            "supabase_url",
            "supabase_key",
            "admin_chat_id",
        ]

        missing = []
        for field in required_fields:
            value = getattr(self, field, None)

            if not value:
                missing.append(field)
                continue

            # Check for placeholder values
            if str(value).lower().startswith("your_"):
                missing.append(field)

        if missing:
            raise ValueError(
                f"Missing or invalid required configuration: "
                f"{', '.join(missing)}. "
                f"Please check your .env file and ensure all required "
                f"values are set."
            )


# Global settings instance
settings = Settings()
