"""In-memory attachment usage store.

Set-backed stand-in for AttachmentUsageRepository with the same counting
rules, used by tests and by applications running without a database.
Not thread-safe for writers.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from custodia.foundation.domain.owner_value_objects import UsageKey

if TYPE_CHECKING:
    from collections.abc import Collection

    from custodia.foundation.domain.owner_value_objects import Owner

# matches the SQL store, where an absent usage_type is stored as ''
_NO_USAGE_TYPE = ""


class InMemoryAttachmentUsageRepository:
    """AttachmentUsagePort implementation holding usages in a set."""

    def __init__(self) -> None:
        self._usages: set[tuple[str, str, str, str]] = set()

    def count_usages(
        self,
        owner_key: str,
        content_ids: Collection[str],
        usage_filter: str | None = None,
    ) -> dict[UsageKey, int]:
        candidates = frozenset(content_ids)
        counts = Counter(
            UsageKey(usage_owner, content_id)
            for usage_owner, content_id, _used_by, usage_type in self._usages
            if usage_owner == owner_key
            and content_id in candidates
            and (usage_filter is None or usage_type == usage_filter)
        )
        return dict(counts)

    def record_usage(
        self,
        owner: Owner,
        content_id: str,
        used_by: Owner,
        usage_type: str | None = None,
    ) -> None:
        self._usages.add(
            (owner.usage_key, content_id, used_by.usage_key, usage_type or _NO_USAGE_TYPE)
        )

    def remove_usages_by(self, used_by: Owner) -> int:
        removed = {u for u in self._usages if u[2] == used_by.usage_key}
        self._usages -= removed
        return len(removed)
