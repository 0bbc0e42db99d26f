"""Wiring of the retention service to the SQL usage store."""

from __future__ import annotations

from typing import TYPE_CHECKING

from custodia.domain.attachments.infrastructure.attachment_usage_repository import (
    AttachmentUsageRepository,
)
from custodia.domain.attachments.retention_service import AttachmentRetentionService

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.orm import Session

    from custodia.domain.attachments.infrastructure.settings import AttachmentUsageSettings


def create_attachment_retention_service(
    session_factory: Callable[[], Session] | None = None,
    settings: AttachmentUsageSettings | None = None,
) -> AttachmentRetentionService:
    """Build an AttachmentRetentionService backed by AttachmentUsageRepository.

    Args:
        session_factory: Session factory for the usage store. Defaults to the
            process-wide factory from ``custodia.infra.persistence``.
        settings: Usage store settings. Loaded from environment when omitted.
    """
    if session_factory is None:
        from custodia.infra.persistence import get_sync_session_factory

        session_factory = get_sync_session_factory()
    return AttachmentRetentionService(AttachmentUsageRepository(session_factory, settings))
