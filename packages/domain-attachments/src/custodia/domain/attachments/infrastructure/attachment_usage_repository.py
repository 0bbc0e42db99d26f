"""Repository for the attachment_usage table.

Each row records that ``used_by`` references the content ``content_id`` of
an attachment held by ``owner``. Usage counts are answered with one grouped
query per call; all methods are sync and take sessions from a factory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from custodia.domain.attachments.infrastructure.settings import (
    AttachmentUsageSettings,
    get_attachment_usage_settings,
)
from custodia.foundation.domain.exceptions import AttachmentUsageLookupError
from custodia.foundation.domain.owner_value_objects import UsageKey, parse_owner_key

if TYPE_CHECKING:
    from collections.abc import Callable, Collection

    from sqlalchemy.orm import Session

    from custodia.foundation.domain.owner_value_objects import Owner

logger = logging.getLogger(__name__)

# usage_type is stored as '' when absent so the unique constraint applies
_NO_USAGE_TYPE = ""


@dataclass
class AttachmentUsageRow:
    """Data transfer object for an attachment_usage row."""

    owner: Owner
    content_id: str
    used_by: Owner
    usage_type: str | None


class AttachmentUsageRepository:
    """SQL-backed attachment usage store.

    Implements AttachmentUsagePort for retention decisions and offers the
    write methods used by whatever records attachment references.

    Args:
        session_factory: Callable returning a SQLAlchemy Session context manager.
        settings: Table and timeout configuration. Loaded from environment
            when omitted.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        settings: AttachmentUsageSettings | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings or get_attachment_usage_settings()

    @property
    def table_name(self) -> str:
        return self._settings.table_name

    # -- Read methods --

    def count_usages(
        self,
        owner_key: str,
        content_ids: Collection[str],
        usage_filter: str | None = None,
    ) -> dict[UsageKey, int]:
        """Count usage rows per content id under one owner.

        Issues a single grouped SELECT covering every candidate. Content ids
        without usages are absent from the result.

        Args:
            owner_key: Usage key of the owning entity.
            content_ids: Candidate content ids. Empty returns {} without a query.
            usage_filter: When given, only usages of this usage type count.

        Returns:
            Mapping of UsageKey to usage count.

        Raises:
            AttachmentUsageLookupError: If the query fails or returns
                malformed rows.
        """
        candidates = sorted(set(content_ids))
        if not candidates:
            return {}

        sql = (
            f"SELECT attachment_content_id, COUNT(*) FROM {self.table_name} "  # noqa: S608
            "WHERE owner_key = :owner_key AND attachment_content_id IN :content_ids"
        )
        params: dict[str, object] = {"owner_key": owner_key, "content_ids": candidates}
        if usage_filter is not None:
            sql += " AND usage_type = :usage_type"
            params["usage_type"] = usage_filter
        sql += " GROUP BY attachment_content_id"
        statement = text(sql).bindparams(bindparam("content_ids", expanding=True))

        try:
            with self._session_factory() as session:
                self._apply_statement_timeout(session)
                result = session.execute(statement, params)
                return {
                    UsageKey(owner_key, str(content_id)): int(count)
                    for content_id, count in result.fetchall()
                }
        except (SQLAlchemyError, TypeError, ValueError) as err:
            logger.warning(
                "attachment_usage_lookup_failed",
                extra={
                    "owner_key": owner_key,
                    "candidate_count": len(candidates),
                    "error": str(err),
                },
            )
            raise AttachmentUsageLookupError(
                owner_key,
                str(err),
                candidate_count=len(candidates),
            ) from err

    def get_usages_for_attachment(self, owner: Owner, content_id: str) -> list[AttachmentUsageRow]:
        """List every usage of one attachment's content under owner."""
        with self._session_factory() as session:
            result = session.execute(
                text(
                    f"SELECT owner_key, attachment_content_id, used_by_key, usage_type "  # noqa: S608
                    f"FROM {self.table_name} "
                    "WHERE owner_key = :owner_key AND attachment_content_id = :content_id "
                    "ORDER BY used_by_key, usage_type"
                ),
                {"owner_key": owner.usage_key, "content_id": content_id},
            )
            return [
                AttachmentUsageRow(
                    owner=parse_owner_key(str(row[0])),
                    content_id=str(row[1]),
                    used_by=parse_owner_key(str(row[2])),
                    usage_type=row[3] or None,
                )
                for row in result.fetchall()
            ]

    # -- Write methods --

    def record_usage(
        self,
        owner: Owner,
        content_id: str,
        used_by: Owner,
        usage_type: str | None = None,
    ) -> None:
        """Record that used_by references content_id held by owner.

        Idempotent: recording the same usage twice keeps a single row.
        """
        with self._session_factory() as session:
            session.execute(
                text(
                    f"INSERT INTO {self.table_name} "  # noqa: S608
                    "(owner_key, attachment_content_id, used_by_key, usage_type, created_at) "
                    "VALUES (:owner_key, :content_id, :used_by_key, :usage_type, "
                    "CURRENT_TIMESTAMP) "
                    "ON CONFLICT (owner_key, attachment_content_id, used_by_key, usage_type) "
                    "DO NOTHING"
                ),
                {
                    "owner_key": owner.usage_key,
                    "content_id": content_id,
                    "used_by_key": used_by.usage_key,
                    "usage_type": usage_type or _NO_USAGE_TYPE,
                },
            )
            session.commit()

    def remove_usages_by(self, used_by: Owner) -> int:
        """Delete every usage recorded for used_by.

        Returns:
            Number of usage rows removed.
        """
        with self._session_factory() as session:
            result = session.execute(
                text(f"DELETE FROM {self.table_name} WHERE used_by_key = :used_by_key"),  # noqa: S608
                {"used_by_key": used_by.usage_key},
            )
            session.commit()
            row_count: int = getattr(result, "rowcount", 0)
        logger.info(
            "attachment_usages_removed",
            extra={"used_by_key": used_by.usage_key, "removed": row_count},
        )
        return row_count

    def _apply_statement_timeout(self, session: Session) -> None:
        """Bound the usage query on PostgreSQL with a transaction-local timeout."""
        timeout_ms = self._settings.statement_timeout_ms
        if timeout_ms <= 0 or session.get_bind().dialect.name != "postgresql":
            return
        session.execute(
            text("SELECT set_config('statement_timeout', :timeout, true)"),
            {"timeout": f"{timeout_ms}ms"},
        )

    @classmethod
    def ensure_table_exists(
        cls,
        session_factory: Callable[[], Session],
        settings: AttachmentUsageSettings | None = None,
    ) -> None:
        """Create the usage table and its lookup index if they do not exist."""
        table = (settings or get_attachment_usage_settings()).table_name
        statements = [
            f"""
            CREATE TABLE IF NOT EXISTS {table} (
                owner_key VARCHAR(255) NOT NULL,
                attachment_content_id VARCHAR(255) NOT NULL,
                used_by_key VARCHAR(255) NOT NULL,
                usage_type VARCHAR(63) NOT NULL DEFAULT '',
                created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (owner_key, attachment_content_id, used_by_key, usage_type)
            )
            """,
            f"""
            CREATE INDEX IF NOT EXISTS idx_{table}_owner_content
                ON {table} (owner_key, attachment_content_id)
            """,
            f"""
            CREATE INDEX IF NOT EXISTS idx_{table}_used_by
                ON {table} (used_by_key)
            """,
        ]
        with session_factory() as session:
            for statement in statements:
                session.execute(text(statement))
            session.commit()
        logger.info("attachment_usage_table_ensured", extra={"table": table})
