"""Custodia Foundation Domain -- pure Python domain primitives.

This package provides the foundational domain building blocks for attachment
retention: attachment and owner value objects, usage keys, exceptions, and
port interfaces.
"""

from custodia.foundation.domain.attachment_value_objects import Attachment, CheckStatus
from custodia.foundation.domain.exceptions import (
    AttachmentUsageLookupError,
    DomainError,
    InvalidOwnerError,
    ValidationError,
)
from custodia.foundation.domain.owner_value_objects import (
    OWNER_TYPES,
    ComponentRef,
    Owner,
    OwnerKind,
    ProjectRef,
    ReleaseRef,
    UsageKey,
    make_owner,
    parse_owner_key,
)
from custodia.foundation.domain.ports import AttachmentUsagePort

__all__ = [
    "OWNER_TYPES",
    "Attachment",
    "AttachmentUsageLookupError",
    "AttachmentUsagePort",
    "CheckStatus",
    "ComponentRef",
    "DomainError",
    "InvalidOwnerError",
    "Owner",
    "OwnerKind",
    "ProjectRef",
    "ReleaseRef",
    "UsageKey",
    "ValidationError",
    "make_owner",
    "parse_owner_key",
]
