"""Credentials model for Twitter posting accounts."""

from __future__ import annotations

from pydantic import BaseModel


class TwitterCredentials(BaseModel):
    """Access token pair for one posting account."""

    access_token: str
    access_token_secret: str
