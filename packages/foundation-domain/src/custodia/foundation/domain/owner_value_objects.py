"""Owner references and usage keys.

An owner is the entity holding an attachment collection. It is modelled as
an explicit tagged union with one variant per entity kind, so a release and
a component that happen to share an identifier never share a usage key.

Example:
    >>> from custodia.foundation.domain import ReleaseRef, UsageKey
    >>> owner = ReleaseRef("r-42")
    >>> owner.usage_key
    'release:r-42'
    >>> UsageKey(owner.usage_key, "content-1")
    UsageKey(owner_key='release:r-42', content_id='content-1')
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, TypeAlias

_KEY_SEPARATOR = ":"


class OwnerKind(StrEnum):
    """Kinds of entity that can own attachments."""

    RELEASE = "release"
    COMPONENT = "component"
    PROJECT = "project"


@dataclass(frozen=True)
class _OwnerRef:
    """Common behaviour of the owner variants.

    Attributes:
        entity_id: Identifier of the owning entity within its kind.

    Raises:
        ValueError: If entity_id is empty or whitespace-only.
    """

    entity_id: str

    kind: ClassVar[OwnerKind]

    def __post_init__(self) -> None:
        if not isinstance(self.entity_id, str) or not self.entity_id.strip():
            msg = f"{type(self).__name__} requires a non-empty entity id, got {self.entity_id!r}"
            raise ValueError(msg)

    @property
    def usage_key(self) -> str:
        """Kind-qualified key used to scope usage queries."""
        return f"{self.kind}{_KEY_SEPARATOR}{self.entity_id}"

    def __str__(self) -> str:
        return self.usage_key


@dataclass(frozen=True)
class ReleaseRef(_OwnerRef):
    """Reference to a release owning attachments."""

    kind: ClassVar[OwnerKind] = OwnerKind.RELEASE


@dataclass(frozen=True)
class ComponentRef(_OwnerRef):
    """Reference to a component owning attachments."""

    kind: ClassVar[OwnerKind] = OwnerKind.COMPONENT


@dataclass(frozen=True)
class ProjectRef(_OwnerRef):
    """Reference to a project owning attachments."""

    kind: ClassVar[OwnerKind] = OwnerKind.PROJECT


Owner: TypeAlias = ReleaseRef | ComponentRef | ProjectRef

OWNER_TYPES: tuple[type[_OwnerRef], ...] = (ReleaseRef, ComponentRef, ProjectRef)

_OWNER_BY_KIND: dict[OwnerKind, type[_OwnerRef]] = {cls.kind: cls for cls in OWNER_TYPES}


def make_owner(kind: OwnerKind | str, entity_id: str) -> Owner:
    """Build the owner variant for a kind and identifier.

    Args:
        kind: OwnerKind or its string value (e.g., "release").
        entity_id: Identifier of the owning entity.

    Returns:
        ReleaseRef, ComponentRef or ProjectRef.

    Raises:
        ValueError: If kind is unknown or entity_id is blank.
    """
    owner_cls = _OWNER_BY_KIND[OwnerKind(kind)]
    return owner_cls(entity_id)  # type: ignore[return-value]


def parse_owner_key(key: str) -> Owner:
    """Inverse of ``Owner.usage_key``.

    Raises:
        ValueError: If the key has no kind prefix or the kind is unknown.
    """
    kind, sep, entity_id = key.partition(_KEY_SEPARATOR)
    if not sep:
        msg = f"Owner key {key!r} has no kind prefix"
        raise ValueError(msg)
    return make_owner(kind, entity_id)


@dataclass(frozen=True, slots=True)
class UsageKey:
    """Composite key of a usage count: (owner usage key, content id)."""

    owner_key: str
    content_id: str
