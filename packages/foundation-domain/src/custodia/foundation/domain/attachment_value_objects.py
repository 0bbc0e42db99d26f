"""Value objects for attachments held by releases, components and projects.

Immutable, hashable domain primitives. Retention comparisons use the
content identifier; set membership uses full value equality.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class CheckStatus(StrEnum):
    """Review-workflow classification of an attachment.

    Produced by the review workflow elsewhere; retention only reads it.

    Uses StrEnum for native JSON serialization.
    """

    NOT_CHECKED = "NOT_CHECKED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True, slots=True)
class Attachment:
    """Reference to stored binary content plus review metadata.

    Attributes:
        content_id: Key of the stored content. None for malformed attachments
            that never received a content id.
        filename: Display metadata, not used for retention.
        check_status: Review classification.

    Example:
        >>> Attachment("c1", "sources.zip", CheckStatus.ACCEPTED).is_accepted
        True
    """

    content_id: str | None
    filename: str = ""
    check_status: CheckStatus = CheckStatus.NOT_CHECKED

    @property
    def is_accepted(self) -> bool:
        """True when the attachment has passed review."""
        return self.check_status == CheckStatus.ACCEPTED

    @property
    def has_content_id(self) -> bool:
        """True when the attachment can be looked up in the usage store."""
        return bool(self.content_id)
