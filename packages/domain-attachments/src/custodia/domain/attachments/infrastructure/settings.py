"""Attachment usage store configuration using Pydantic settings.

Settings are loaded from environment variables with ``ATTACHMENT_USAGE_``
prefix.
"""

from __future__ import annotations

import re
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_IDENTIFIER_PATTERN = re.compile(r"^[a-z_][a-z0-9_]{0,62}$")


class AttachmentUsageSettings(BaseSettings):
    """Configuration for the attachment usage repository.

    Environment Variables:
        ATTACHMENT_USAGE_TABLE_NAME: Table holding usage records
            (default: attachment_usage)
        ATTACHMENT_USAGE_STATEMENT_TIMEOUT_MS: Per-query timeout applied on
            PostgreSQL; 0 disables it (default: 5000)

    Example:
        >>> settings = AttachmentUsageSettings()
        >>> settings.table_name
        'attachment_usage'
    """

    model_config = SettingsConfigDict(
        env_prefix="ATTACHMENT_USAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    table_name: str = Field(
        default="attachment_usage",
        description="Table holding attachment usage records",
    )
    statement_timeout_ms: int = Field(
        default=5000,
        ge=0,
        le=600_000,
        description="Usage query timeout in milliseconds (0 disables)",
    )

    @field_validator("table_name")
    @classmethod
    def validate_table_name(cls, v: str) -> str:
        """Only plain lowercase SQL identifiers are interpolated into queries."""
        if not _IDENTIFIER_PATTERN.match(v):
            msg = f"Invalid table name {v!r}: must be a lowercase SQL identifier"
            raise ValueError(msg)
        return v


@lru_cache(maxsize=1)
def get_attachment_usage_settings() -> AttachmentUsageSettings:
    """Get cached attachment usage settings singleton.

    Clear cache with ``get_attachment_usage_settings.cache_clear()`` for testing.
    """
    return AttachmentUsageSettings()
