"""Core modules for the tweetwatch bot."""

from .conversation import (
    ConversationAborted,
    ConversationManager,
    ConversationState,
    numbered_list_pattern,
)
from .config import (
    BOT_SCOPES,
    COMPONENTS_DIR,
    PACKAGE_DIR,
    TweetwatchSettings,
    get_settings,
    validate_env_vars,
)
from .database import DatabaseManager, PoolConfig
from .logging import setup_logging
from .pg_listener import ACTIVITY_CHANNEL, decode_activity_payload, pg_listen

__all__ = [
    # Settings
    "TweetwatchSettings",
    "get_settings",
    "validate_env_vars",
    # Path Constants
    "PACKAGE_DIR",
    "COMPONENTS_DIR",
    # Scope Constants
    "BOT_SCOPES",
    # Setup functions
    "setup_logging",
    # Database
    "DatabaseManager",
    "PoolConfig",
    # Conversations
    "ConversationAborted",
    "ConversationManager",
    "ConversationState",
    "numbered_list_pattern",
    # PG Listener
    "ACTIVITY_CHANNEL",
    "decode_activity_payload",
    "pg_listen",
]
