"""
Organization Entity

Tenant aggregate root that owns memberships and invitations.
"""

from uuid import UUID, uuid4

from sqlmodel import Field, Index

from ..base import TimestampedModel

SLUG_INDEX = "uq_organizations_slug"


class Organization(TimestampedModel, table=True):
    """
    Organization entity - the tenant.

    Business Rules:
    - Slug is generated once at creation and never follows name changes
    - Slug is stored lowercase, so uniqueness is case-insensitive
    - Deleting an organization deletes its memberships and invitations
    """

    __tablename__ = "organizations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    slug: str = Field(max_length=255)

    __table_args__ = (Index(SLUG_INDEX, "slug", unique=True),)
