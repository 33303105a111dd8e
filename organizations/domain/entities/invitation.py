"""
Invitation Entity

Pending email-scoped offer of membership, authenticated by a token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Uuid, text
from sqlmodel import Field, Index

from ..base import TimestampedModel
from .enums import InvitationStatus

TOKEN_INDEX = "uq_invitations_token"
OPEN_INVITATION_INDEX = "uq_invitations_open_email"


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class Invitation(TimestampedModel, table=True):
    """
    Invitation entity - offer to join an organization.

    Business Rules:
    - Email is stored trimmed and lowercased
    - Token is unique, random (32 bytes) and URL-safe
    - At most one non-accepted invitation per (organization, email);
      an expired one is reactivated rather than duplicated
    - Status is derived from accepted_at / expires_at, never stored:
      accepted wins over expired
    - expires_at = None means the invitation never expires
    - invited_by_id is a weak reference, nulled when that user is deleted
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    organization_id: UUID = Field(
        sa_column=Column(
            Uuid,
            ForeignKey("organizations.id", ondelete="CASCADE"),
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

    email: str = Field(max_length=255, index=True)
    role: str = Field(max_length=50)
    token: str = Field(max_length=64)

    expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )
    accepted_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    __table_args__ = (
        Index(TOKEN_INDEX, "token", unique=True),
        Index(
            OPEN_INVITATION_INDEX,
            "organization_id",
            "email",
            unique=True,
            sqlite_where=text("accepted_at IS NULL"),
            postgresql_where=text("accepted_at IS NULL"),
        ),
        Index("idx_invitation_expires_at", "expires_at"),
    )

    @property
    def is_accepted(self) -> bool:
        return self.accepted_at is not None

    def is_expired(self, now: datetime) -> bool:
        """Past expiry and never accepted"""
        if self.is_accepted or self.expires_at is None:
            return False
        return self.expires_at <= now

    def is_pending(self, now: datetime) -> bool:
        return not self.is_accepted and not self.is_expired(now)

    def status(self, now: datetime) -> InvitationStatus:
        if self.is_accepted:
            return InvitationStatus.accepted
        if self.is_expired(now):
            return InvitationStatus.expired
        return InvitationStatus.pending

    def matches_email(self, email: Optional[str]) -> bool:
        normalized = normalize_email(email)
        return bool(normalized) and normalize_email(self.email) == normalized
