"""
Membership Entity

Links a User to an Organization with a role.
"""

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, ForeignKey, Uuid, text
from sqlmodel import Field, Index

from ..base import TimestampedModel
from ..roles import OWNER

MEMBERSHIP_USER_INDEX = "uq_memberships_organization_user_id"
SINGLE_OWNER_INDEX = "uq_memberships_single_owner"


class Membership(TimestampedModel, table=True):
    """
    Membership entity - (organization, user, role).

    Business Rules:
    - (organization_id, user_id) is unique
    - At most one owner membership per organization (partial unique index)
    - Owner role is only reachable through organization bootstrap or
      ownership transfer
    - invited_by_id is a weak reference, nulled when that user is deleted
    """

    __tablename__ = "memberships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_id: UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    user_id: UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    invited_by_id: Optional[UUID] = Field(
        default=None,
        sa_column=Column(
            Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
        ),
    )

    role: str = Field(max_length=50, index=True)

    __table_args__ = (
        Index(MEMBERSHIP_USER_INDEX, "organization_id", "user_id", unique=True),
        Index(
            SINGLE_OWNER_INDEX,
            "organization_id",
            unique=True,
            sqlite_where=text(f"role = '{OWNER}'"),
            postgresql_where=text(f"role = '{OWNER}'"),
        ),
    )

    @property
    def is_owner(self) -> bool:
        return self.role == OWNER
