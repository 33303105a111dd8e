"""
Unique-index violation translation.

SQLite reports the offending columns ("UNIQUE constraint failed:
memberships.organization_id, memberships.user_id"), PostgreSQL the index
name ('violates unique constraint "uq_memberships_single_owner"'). Each
repository lists, per index, the markers that identify it in either form.
"""

import logging
from typing import Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from organizations.domain.errors import UniqueViolation

logger = logging.getLogger(__name__)

Constraint = Tuple[str, Sequence[str]]


def is_unique_error(exc: IntegrityError) -> bool:
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate" in message


def to_unique_violation(
    exc: IntegrityError, constraints: Sequence[Constraint]
) -> Optional[UniqueViolation]:
    """Map an IntegrityError to the first matching index, None if not unique"""
    if not is_unique_error(exc):
        return None
    message = str(exc.orig).lower()
    for name, markers in constraints:
        if name in message or any(marker in message for marker in markers):
            return UniqueViolation(name)
    return UniqueViolation("unknown", str(exc.orig))


async def flush(session: AsyncSession, constraints: Sequence[Constraint]) -> None:
    try:
        await session.flush()
    except IntegrityError as exc:
        violation = to_unique_violation(exc, constraints)
        if violation is None:
            raise
        logger.debug(f"Unique violation on {violation.constraint}")
        raise violation from exc
