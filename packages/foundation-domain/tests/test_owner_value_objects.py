"""Tests for owner references and usage keys."""

from __future__ import annotations

import pytest

from custodia.foundation.domain import (
    ComponentRef,
    OwnerKind,
    ProjectRef,
    ReleaseRef,
    UsageKey,
    make_owner,
    parse_owner_key,
)


@pytest.mark.unit
class TestOwnerRefs:
    @pytest.mark.parametrize(
        ("owner", "expected"),
        [
            (ReleaseRef("42"), "release:42"),
            (ComponentRef("42"), "component:42"),
            (ProjectRef("42"), "project:42"),
        ],
    )
    def test_usage_key_is_kind_qualified(self, owner: ReleaseRef, expected: str) -> None:
        assert owner.usage_key == expected
        assert str(owner) == expected

    def test_same_id_different_kind_not_equal(self) -> None:
        assert ReleaseRef("42") != ComponentRef("42")
        assert len({ReleaseRef("42"), ComponentRef("42"), ProjectRef("42")}) == 3

    def test_same_kind_same_id_equal(self) -> None:
        assert ReleaseRef("42") == ReleaseRef("42")
        assert hash(ReleaseRef("42")) == hash(ReleaseRef("42"))

    @pytest.mark.parametrize("bad", ["", "   "])
    def test_blank_id_rejected(self, bad: str) -> None:
        with pytest.raises(ValueError, match="non-empty entity id"):
            ProjectRef(bad)

    def test_kind_constants(self) -> None:
        assert ReleaseRef.kind is OwnerKind.RELEASE
        assert ComponentRef.kind is OwnerKind.COMPONENT
        assert ProjectRef.kind is OwnerKind.PROJECT


@pytest.mark.unit
class TestMakeOwner:
    def test_from_enum(self) -> None:
        assert make_owner(OwnerKind.COMPONENT, "c1") == ComponentRef("c1")

    def test_from_string(self) -> None:
        assert make_owner("project", "p1") == ProjectRef("p1")

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError):
            make_owner("vendor", "v1")


@pytest.mark.unit
class TestParseOwnerKey:
    def test_round_trip(self) -> None:
        owner = ReleaseRef("r:with:colons")
        assert parse_owner_key(owner.usage_key) == owner

    def test_missing_prefix(self) -> None:
        with pytest.raises(ValueError, match="no kind prefix"):
            parse_owner_key("r1")


@pytest.mark.unit
class TestUsageKey:
    def test_usable_as_mapping_key(self) -> None:
        counts = {UsageKey("release:r1", "c1"): 2}
        assert counts[UsageKey("release:r1", "c1")] == 2
        assert UsageKey("component:r1", "c1") not in counts
