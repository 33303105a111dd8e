"""
Get Organization Use Case
"""

from typing import Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import Organization
from organizations.domain.errors import NotAMember, OrganizationNotFound

from ..base import OrganizationUseCase


class GetOrganizationUseCase(OrganizationUseCase):
    """
    Business Rules:
    - Lookup is by slug, case-insensitive
    - Actor needs view_organization
    - Non-members get OrganizationNotFound, so slugs of other
      organizations are not disclosed
    """

    async def execute(self, slug: str, actor_id: Optional[UUID]) -> Organization:
        actor_id = require_actor(actor_id)
        return await self._run(self._get, slug, actor_id)

    async def _get(self, slug: str, actor_id: UUID) -> Organization:
        organization = await self.uow.organizations.get_by_slug(slug)
        if organization is None:
            raise OrganizationNotFound()

        try:
            await self.authorization.authorize(
                organization.id, actor_id, "view_organization"
            )
        except NotAMember:
            raise OrganizationNotFound()
        return organization
