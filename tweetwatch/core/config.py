"""tweetwatch bot configuration"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tweetwatch.shared.models.twitter_account import TwitterCredentials

logger = logging.getLogger(__name__)

# === Path Configuration ===
PACKAGE_DIR = Path(__file__).parent.parent
PROJECT_DIR = PACKAGE_DIR.parent
COMPONENTS_DIR = PACKAGE_DIR / "components"

BOT_SCOPES = [
    "user:bot",  # Bot identifier
    "user:read:chat",  # Read chat messages
    "user:write:chat",  # Send chat messages
]


class TweetwatchSettings(BaseSettings):
    """tweetwatch settings"""

    model_config = SettingsConfigDict(
        env_file=PROJECT_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Twitch OAuth
    client_id: str = Field(..., description="Twitch OAuth Client ID")
    client_secret: str = Field(..., description="Twitch OAuth Client Secret")

    # Bot Configuration
    bot_id: str = Field(..., description="Bot User ID")
    owner_id: str = Field(..., description="Owner User ID")
    bot_name: str = Field(default="hubot", description="Name used in help text")

    # Database (empty = in-memory brain)
    database_url: str = Field(default="", description="PostgreSQL database URL")

    # Twitter
    twitter_consumer_key: str = Field(default="", description="Twitter consumer key")
    twitter_consumer_secret: str = Field(default="", description="Twitter consumer secret")
    tweeter_accounts: dict[str, TwitterCredentials] = Field(
        default_factory=dict, description="JSON object of account name -> access token pair"
    )
    twitter_monitoring_enabled: str | None = Field(
        default=None, description="Override for the stored monitoring flag ('true'/'false')"
    )
    twitter_restore_events: bool = Field(
        default=True, description="Restore edited event rules from the brain on start"
    )
    conversation_timeout: float = Field(
        default=60.0, description="Seconds to wait for a reply to a prompt"
    )

    # Environment
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL starts with postgresql:// when set"""
        if v and not v.startswith("postgresql://"):
            raise ValueError("DATABASE_URL must start with 'postgresql://'")
        return v

    @field_validator("conversation_timeout")
    @classmethod
    def validate_conversation_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("CONVERSATION_TIMEOUT must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            logger.warning(f"Invalid log level '{v}', defaulting to INFO")
            return "INFO"
        return v_upper

    @property
    def has_twitter_credentials(self) -> bool:
        return bool(self.twitter_consumer_key and self.twitter_consumer_secret)


@lru_cache
def get_settings() -> TweetwatchSettings:
    """Get cached settings instance"""
    return TweetwatchSettings()  # type: ignore[call-arg]


def validate_env_vars() -> None:
    """Validate required environment variables, logging the failure."""
    try:
        get_settings()
        logger.info("All required environment variables validated successfully")
    except Exception as e:
        logging.getLogger("Bot").error(f"Environment validation failed: {e}")
        raise ValueError(str(e)) from e
