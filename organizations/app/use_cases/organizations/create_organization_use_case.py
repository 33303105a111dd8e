"""
Create Organization Use Case

Bootstrap path: the only way an organization comes into existence, with
the acting user as its single owner.
"""

import logging
from typing import Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import CallbackEvent, Membership, Organization
from organizations.domain.errors import OrganizationLimitReached
from organizations.domain.roles import OWNER

from ..base import OrganizationUseCase, clean_name

logger = logging.getLogger(__name__)


class CreateOrganizationUseCase(OrganizationUseCase):
    """
    Use case for creating an organization.

    Business Rules:
    - Actor must exist and becomes the owner membership
    - Slug is derived from the name once and made unique
    - Optional cap on how many organizations one user may own
    - Dispatches organization_created
    """

    async def execute(self, name: str, actor_id: Optional[UUID]) -> Organization:
        """
        Execute create organization use case.

        Args:
            name: Display name
            actor_id: User creating (and owning) the organization

        Returns:
            The new Organization
        """
        actor_id = require_actor(actor_id)
        name = clean_name(name)
        return await self._run(self._create, name, actor_id)

    async def _create(self, name: str, actor_id: UUID) -> Organization:
        actor = await self._get_user(actor_id)

        limit = self.settings.max_organizations_per_user
        if limit is not None:
            owned = await self.uow.organizations.count_owned_by(actor_id)
            if owned >= limit:
                raise OrganizationLimitReached(
                    f"You can own at most {limit} organization(s)"
                )

        now = self.clock.now()
        slug = await self.slugs.generate(name, self.uow.organizations.slug_exists)
        organization = await self.uow.organizations.create(
            Organization(name=name, slug=slug, created_at=now, updated_at=now)
        )
        await self.uow.memberships.create(
            Membership(
                organization_id=organization.id,
                user_id=actor_id,
                role=OWNER,
                created_at=now,
                updated_at=now,
            )
        )

        self._emit(CallbackEvent.organization_created, organization=organization, user=actor)
        logger.info(f"Organization {organization.id} ({slug}) created by {actor_id}")
        return organization
