"""Infrastructure adapters for attachment retention."""

from custodia.domain.attachments.infrastructure.attachment_usage_repository import (
    AttachmentUsageRepository,
    AttachmentUsageRow,
)
from custodia.domain.attachments.infrastructure.factory import create_attachment_retention_service
from custodia.domain.attachments.infrastructure.in_memory_usage_repository import (
    InMemoryAttachmentUsageRepository,
)
from custodia.domain.attachments.infrastructure.settings import (
    AttachmentUsageSettings,
    get_attachment_usage_settings,
)

__all__ = [
    "AttachmentUsageRepository",
    "AttachmentUsageRow",
    "AttachmentUsageSettings",
    "InMemoryAttachmentUsageRepository",
    "create_attachment_retention_service",
    "get_attachment_usage_settings",
]
