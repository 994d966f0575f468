"""Shared models and repositories for tweetwatch."""
