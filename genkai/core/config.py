#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Environment-driven settings for genkai.

Every value can be overridden with a ``GENKAI_`` prefixed environment variable
(or a ``.env`` file), e.g. ``GENKAI_METHOD_SEPARATOR=$`` restores the
separator used by older clients.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENDPOINT_PATH = "/__genkai_endpoint"
DEFAULT_SESSION_HEADER = "genkai-session"
DEFAULT_METHOD_SEPARATOR = "."


class GenkaiSettings(BaseSettings):
    """Process settings for the dispatcher and the bundled transports."""

    model_config = SettingsConfigDict(
        env_prefix="GENKAI_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    endpoint_path: str = DEFAULT_ENDPOINT_PATH
    session_header: str = DEFAULT_SESSION_HEADER
    method_separator: str = DEFAULT_METHOD_SEPARATOR
    log_level: str = "INFO"

    @field_validator("endpoint_path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("endpoint_path cannot be empty")
        return v if v.startswith("/") else "/" + v

    @field_validator("method_separator")
    @classmethod
    def single_character(cls, v: str) -> str:
        if len(v) != 1 or v.isalnum() or v == "_":
            raise ValueError("method_separator must be a single non-identifier character")
        return v

    @field_validator("log_level")
    @classmethod
    def upper_level(cls, v: str) -> str:
        return v.strip().upper()


@lru_cache
def get_settings() -> GenkaiSettings:
    return GenkaiSettings()
