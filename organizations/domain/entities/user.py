"""
User Entity

Local record of a person who can belong to many organizations.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from ..base import utcnow


class User(SQLModel, table=True):
    """
    User entity - the identity memberships and invitations point at.

    Business Rules:
    - Email is unique and compared case-insensitively
    - Deleting a user removes their memberships and nulls every
      invited_by reference to them
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, nullable=False)
    )
