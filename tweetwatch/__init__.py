"""Twitter monitoring for platform activity, driven from Twitch chat."""

__version__ = "0.1.0"
