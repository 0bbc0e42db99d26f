"""Application service wrapping the retention decision.

Holds the usage lookup adapter so entity handlers do not need to pass it on
every call, and turns the keep-set into an advisory update plan.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING

from custodia.domain.attachments.retention import as_attachment_set, resolve_attachments_to_keep

if TYPE_CHECKING:
    from collections.abc import Iterable

    from custodia.foundation.domain.attachment_value_objects import Attachment
    from custodia.foundation.domain.owner_value_objects import Owner
    from custodia.foundation.domain.ports import AttachmentUsagePort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetentionDecision:
    """Outcome of planning an attachment collection update.

    Attributes:
        to_keep: Attachments that must not be deleted.
        eligible_for_deletion: Original attachments whose content is not
            represented in ``to_keep``. Deleting them is allowed, not required.
    """

    to_keep: frozenset[Attachment] = field(default_factory=frozenset)
    eligible_for_deletion: frozenset[Attachment] = field(default_factory=frozenset)


class AttachmentRetentionService:
    """Retention decisions for release, component and project updates.

    Stateless apart from the injected usage lookup; safe to share between
    concurrent callers.

    Args:
        usage_lookup: Adapter answering batched usage count queries.
    """

    def __init__(self, usage_lookup: AttachmentUsagePort) -> None:
        self._usage_lookup = usage_lookup

    def attachments_to_keep(
        self,
        owner: Owner | None,
        original: Iterable[Attachment] | None,
        changed: Iterable[Attachment] | None,
    ) -> set[Attachment]:
        """Return the keep-set for an update of owner's attachments."""
        return resolve_attachments_to_keep(
            owner, original, changed, usage_lookup=self._usage_lookup
        )

    async def attachments_to_keep_async(
        self,
        owner: Owner | None,
        original: Iterable[Attachment] | None,
        changed: Iterable[Attachment] | None,
    ) -> set[Attachment]:
        """Async variant of attachments_to_keep.

        Runs the blocking usage lookup in a worker thread via asyncio.to_thread.
        """
        return await asyncio.to_thread(
            partial(self.attachments_to_keep, owner, original, changed)
        )

    def plan_update(
        self,
        owner: Owner | None,
        original: Iterable[Attachment] | None,
        changed: Iterable[Attachment] | None,
    ) -> RetentionDecision:
        """Split the original attachments into kept and deletable ones.

        An original attachment is eligible for deletion only when no kept
        attachment shares its content id, so content still referenced by a
        mutated copy in the changed set is never offered for deletion.
        Attachments without a content id are eligible unless kept themselves.

        Raises:
            InvalidOwnerError: If owner is None or not an owner reference.
        """
        original_set = as_attachment_set(original)
        to_keep = frozenset(self.attachments_to_keep(owner, original_set, changed))
        kept_content_ids = {a.content_id for a in to_keep if a.has_content_id}
        # attachments without a content id can only be matched by value
        eligible = frozenset(
            a
            for a in original_set
            if (a.content_id not in kept_content_ids if a.has_content_id else a not in to_keep)
        )

        if eligible:
            logger.info(
                "attachments_eligible_for_deletion",
                extra={
                    "owner_key": str(owner),
                    "eligible_count": len(eligible),
                    "keep_count": len(to_keep),
                },
            )
        return RetentionDecision(to_keep=to_keep, eligible_for_deletion=eligible)
