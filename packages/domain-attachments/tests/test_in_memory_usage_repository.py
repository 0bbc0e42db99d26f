"""Unit tests for InMemoryAttachmentUsageRepository."""

from __future__ import annotations

from typing import Any

import pytest

from custodia.domain.attachments.infrastructure import InMemoryAttachmentUsageRepository
from custodia.foundation.domain import (
    AttachmentUsagePort,
    ComponentRef,
    ProjectRef,
    ReleaseRef,
    UsageKey,
)


@pytest.mark.unit
class TestInMemoryAttachmentUsageRepository:
    def test_satisfies_port(self, usage_repo: Any) -> None:
        assert isinstance(usage_repo, AttachmentUsagePort)

    def test_empty_store_returns_empty_mapping(self, usage_repo: Any) -> None:
        assert usage_repo.count_usages("release:r1", set()) == {}
        assert usage_repo.count_usages("release:r1", {"c1"}) == {}

    def test_counts_distinct_users(self, usage_repo: Any) -> None:
        owner = ReleaseRef("r1")
        usage_repo.record_usage(owner, "c1", ProjectRef("p1"))
        usage_repo.record_usage(owner, "c1", ProjectRef("p2"))
        usage_repo.record_usage(owner, "c1", ProjectRef("p2"))
        usage_repo.record_usage(owner, "c2", ProjectRef("p1"))
        result = usage_repo.count_usages(owner.usage_key, {"c1", "c3"})
        assert result == {UsageKey(owner.usage_key, "c1"): 2}

    def test_scoped_by_owner_kind(self, usage_repo: Any) -> None:
        usage_repo.record_usage(ComponentRef("x"), "c1", ProjectRef("p1"))
        assert usage_repo.count_usages(ReleaseRef("x").usage_key, {"c1"}) == {}

    def test_usage_filter(self, usage_repo: Any) -> None:
        owner = ReleaseRef("r1")
        usage_repo.record_usage(owner, "c1", ProjectRef("p1"), "license_info")
        usage_repo.record_usage(owner, "c1", ProjectRef("p2"))
        assert usage_repo.count_usages(owner.usage_key, {"c1"}, "license_info") == {
            UsageKey(owner.usage_key, "c1"): 1
        }
        assert usage_repo.count_usages(owner.usage_key, {"c1"}) == {
            UsageKey(owner.usage_key, "c1"): 2
        }

    def test_remove_usages_by(self, usage_repo: Any) -> None:
        owner = ReleaseRef("r1")
        usage_repo.record_usage(owner, "c1", ProjectRef("p1"))
        usage_repo.record_usage(owner, "c2", ProjectRef("p1"))
        usage_repo.record_usage(owner, "c1", ProjectRef("p2"))
        assert usage_repo.remove_usages_by(ProjectRef("p1")) == 2
        assert usage_repo.count_usages(owner.usage_key, {"c1", "c2"}) == {
            UsageKey(owner.usage_key, "c1"): 1
        }

    def test_absent_usage_type_stored_as_empty(self, usage_repo: Any) -> None:
        owner = ReleaseRef("r1")
        usage_repo.record_usage(owner, "c1", ProjectRef("p1"), None)
        usage_repo.record_usage(owner, "c1", ProjectRef("p1"), "")
        assert usage_repo.count_usages(owner.usage_key, {"c1"}) == {
            UsageKey(owner.usage_key, "c1"): 1
        }
        assert usage_repo.count_usages(owner.usage_key, {"c1"}, "") == {
            UsageKey(owner.usage_key, "c1"): 1
        }

    def test_keeps_no_call_history(self) -> None:
        repo = InMemoryAttachmentUsageRepository()
        for _ in range(3):
            repo.count_usages("release:r1", {"c1"})
        assert not hasattr(repo, "calls")
