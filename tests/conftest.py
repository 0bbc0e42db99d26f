"""Shared fixtures for integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from custodia.domain.attachments.infrastructure import (
    AttachmentUsageRepository,
    AttachmentUsageSettings,
)
from custodia.infra.persistence import DatabaseManager, DatabaseSettings

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from sqlalchemy.orm import Session


@pytest.fixture()
def usage_settings() -> AttachmentUsageSettings:
    return AttachmentUsageSettings(table_name="attachment_usage", statement_timeout_ms=0)


@pytest.fixture()
def session_factory(
    tmp_path: Path, usage_settings: AttachmentUsageSettings
) -> Iterator[Callable[[], Session]]:
    """Session factory over a throwaway SQLite database with the usage table."""
    manager = DatabaseManager(DatabaseSettings(url=f"sqlite:///{tmp_path / 'usage.db'}"))  # type: ignore[call-arg]
    factory = manager.get_sync_session_factory()
    AttachmentUsageRepository.ensure_table_exists(factory, usage_settings)
    yield factory
    manager.dispose()


@pytest.fixture()
def usage_repository(
    session_factory: Callable[[], Session], usage_settings: AttachmentUsageSettings
) -> AttachmentUsageRepository:
    return AttachmentUsageRepository(session_factory, usage_settings)
