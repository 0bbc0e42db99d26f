"""Custodia Attachments -- retention decisions for attachment updates.

Decides which attachments of a release, component or project must survive
an update: everything the caller still wants, every accepted attachment,
and everything another entity still uses.
"""

from custodia.domain.attachments.retention import (
    as_attachment_set,
    resolve_attachments_to_keep,
)
from custodia.domain.attachments.retention_service import (
    AttachmentRetentionService,
    RetentionDecision,
)

__all__ = [
    "AttachmentRetentionService",
    "RetentionDecision",
    "as_attachment_set",
    "resolve_attachments_to_keep",
]
