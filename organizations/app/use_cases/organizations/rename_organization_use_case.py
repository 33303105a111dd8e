"""
Rename Organization Use Case
"""

import logging
from typing import Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import Organization

from ..base import OrganizationUseCase, clean_name

logger = logging.getLogger(__name__)


class RenameOrganizationUseCase(OrganizationUseCase):
    """
    Business Rules:
    - Actor needs manage_settings
    - The slug is left untouched
    """

    async def execute(
        self, organization_id: UUID, name: str, actor_id: Optional[UUID]
    ) -> Organization:
        actor_id = require_actor(actor_id)
        name = clean_name(name)
        return await self._run(self._rename, organization_id, name, actor_id)

    async def _rename(
        self, organization_id: UUID, name: str, actor_id: UUID
    ) -> Organization:
        organization = await self._get_organization(organization_id)
        await self.authorization.authorize(organization.id, actor_id, "manage_settings")

        if organization.name == name:
            return organization

        organization.name = name
        organization.updated_at = self.clock.now()
        organization = await self.uow.organizations.update(organization)
        logger.info(f"Organization {organization.id} renamed by {actor_id}")
        return organization
