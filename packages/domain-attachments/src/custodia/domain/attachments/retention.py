"""Retention decision for attachment collection updates.

Given the attachments an owner held before an edit and the attachments the
caller wants it to hold afterwards, decide which attachments must not be
deleted. Three sources are merged:

1. every attachment in the changed set;
2. accepted attachments from the original set whose content id is not
   already kept;
3. attachments from the original set whose content is still used by other
   entities, as reported by one batched usage lookup.

The result is advisory. Callers may delete attachments outside the keep-set
but are never obliged to.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from custodia.foundation.domain.exceptions import InvalidOwnerError
from custodia.foundation.domain.owner_value_objects import OWNER_TYPES, UsageKey

if TYPE_CHECKING:
    from collections.abc import Iterable

    from custodia.foundation.domain.attachment_value_objects import Attachment
    from custodia.foundation.domain.owner_value_objects import Owner
    from custodia.foundation.domain.ports import AttachmentUsagePort

logger = logging.getLogger(__name__)


def as_attachment_set(attachments: Iterable[Attachment] | None) -> frozenset[Attachment]:
    """Normalize an optional attachment collection; None means empty."""
    if attachments is None:
        return frozenset()
    return frozenset(attachments)


def _usage_key_of(owner: Owner | None) -> str:
    if owner is None:
        raise InvalidOwnerError(owner, "owner is required")
    if not isinstance(owner, OWNER_TYPES):
        raise InvalidOwnerError(owner, "owner must be a release, component or project reference")
    return owner.usage_key


def resolve_attachments_to_keep(
    owner: Owner | None,
    original: Iterable[Attachment] | None,
    changed: Iterable[Attachment] | None,
    *,
    usage_lookup: AttachmentUsagePort,
) -> set[Attachment]:
    """Compute the set of attachments that must survive an update.

    Issues exactly one ``usage_lookup.count_usages`` call. Failures raised by
    the lookup propagate unchanged and no partial result is produced.

    Args:
        owner: Entity holding the attachments.
        original: Attachments before the edit. None is treated as empty.
        changed: Attachments requested after the edit. None is treated as empty.
        usage_lookup: Usage count capability.

    Returns:
        The keep-set, always a subset of ``original | changed`` and a superset
        of ``changed``.

    Raises:
        InvalidOwnerError: If owner is None or not an owner reference.
    """
    owner_key = _usage_key_of(owner)
    original_set = as_attachment_set(original)

    to_keep = set(as_attachment_set(changed))
    kept_content_ids = {a.content_id for a in to_keep}

    # accepted attachments are never dropped silently
    to_keep.update(
        a for a in original_set if a.is_accepted and a.content_id not in kept_content_ids
    )

    # malformed attachments cannot be looked up
    candidate_ids = {a.content_id for a in original_set if a.content_id}
    usage_counts = usage_lookup.count_usages(owner_key, candidate_ids, None)
    used = {
        a
        for a in original_set
        if a.content_id and usage_counts.get(UsageKey(owner_key, a.content_id), 0) > 0
    }
    to_keep.update(used)

    logger.debug(
        "attachments_to_keep_resolved",
        extra={
            "owner_key": owner_key,
            "original_count": len(original_set),
            "candidate_count": len(candidate_ids),
            "used_count": len(used),
            "keep_count": len(to_keep),
        },
    )
    return to_keep
