"""Shared fixtures for domain-attachments tests."""

from __future__ import annotations

from collections.abc import Callable, Collection, Mapping

import pytest

from custodia.domain.attachments.infrastructure import InMemoryAttachmentUsageRepository
from custodia.foundation.domain import Attachment, CheckStatus, ReleaseRef, UsageKey


class StubUsageLookup:
    """Usage lookup returning a fixed mapping and recording every call."""

    def __init__(self, counts: Mapping[UsageKey, int] | None = None) -> None:
        self._counts = dict(counts or {})
        self.calls: list[tuple[str, frozenset[str], str | None]] = []

    def count_usages(
        self,
        owner_key: str,
        content_ids: Collection[str],
        usage_filter: str | None = None,
    ) -> dict[UsageKey, int]:
        self.calls.append((owner_key, frozenset(content_ids), usage_filter))
        return dict(self._counts)


class RecordingUsageRepository(InMemoryAttachmentUsageRepository):
    """In-memory usage store that also records every count_usages call."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, frozenset[str], str | None]] = []

    def count_usages(
        self,
        owner_key: str,
        content_ids: Collection[str],
        usage_filter: str | None = None,
    ) -> dict[UsageKey, int]:
        self.calls.append((owner_key, frozenset(content_ids), usage_filter))
        return super().count_usages(owner_key, content_ids, usage_filter)


@pytest.fixture()
def owner() -> ReleaseRef:
    return ReleaseRef("r-1")


@pytest.fixture()
def stub_lookup() -> Callable[..., StubUsageLookup]:
    """Factory for StubUsageLookup instances."""
    return StubUsageLookup


@pytest.fixture()
def usage_repo() -> RecordingUsageRepository:
    return RecordingUsageRepository()


@pytest.fixture()
def accepted() -> Callable[[str], Attachment]:
    def make(content_id: str) -> Attachment:
        return Attachment(content_id, f"{content_id}.file", CheckStatus.ACCEPTED)

    return make


@pytest.fixture()
def rejected() -> Callable[[str], Attachment]:
    def make(content_id: str) -> Attachment:
        return Attachment(content_id, f"{content_id}.file", CheckStatus.REJECTED)

    return make


@pytest.fixture()
def not_checked() -> Callable[[str], Attachment]:
    def make(content_id: str) -> Attachment:
        return Attachment(content_id, f"{content_id}.file", CheckStatus.NOT_CHECKED)

    return make
