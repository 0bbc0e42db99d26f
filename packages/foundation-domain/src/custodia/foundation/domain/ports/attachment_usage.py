"""Port interface for attachment usage lookups.

This module defines the AttachmentUsagePort protocol. Retention logic uses
it to ask how many other entities still reference each candidate content id,
without coupling to the store that records those references.

Example:
    >>> from custodia.foundation.domain import UsageKey
    >>> from custodia.foundation.domain.ports import AttachmentUsagePort
    >>> def is_used(lookup: AttachmentUsagePort, owner_key: str, content_id: str) -> bool:
    ...     counts = lookup.count_usages(owner_key, {content_id})
    ...     return counts.get(UsageKey(owner_key, content_id), 0) > 0
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping

    from custodia.foundation.domain.owner_value_objects import UsageKey


@runtime_checkable
class AttachmentUsagePort(Protocol):
    """Port for batched attachment usage counts.

    Implementations must be read-only and idempotent. One call covers the
    whole candidate set; implementations must not require it to be non-empty.

    The protocol is runtime_checkable to enable isinstance() verification
    in tests and dependency injection validation.
    """

    def count_usages(
        self,
        owner_key: str,
        content_ids: Collection[str],
        usage_filter: str | None = None,
    ) -> Mapping[UsageKey, int]:
        """Count references to each candidate content id under an owner.

        Args:
            owner_key: Usage key of the owning entity (``Owner.usage_key``).
            content_ids: Candidate content identifiers. May be empty.
            usage_filter: Reserved secondary filter narrowing the usage scope.
                Implementations must accept it and may ignore it.

        Returns:
            Mapping from UsageKey(owner_key, content_id) to a non-negative
            count. Pairs that are absent count as zero.
        """
        ...
