"""
Delete Organization Use Case

Hard delete; memberships and invitations go with the organization.
"""

import logging
from typing import Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor

from ..base import OrganizationUseCase

logger = logging.getLogger(__name__)


class DeleteOrganizationUseCase(OrganizationUseCase):
    """
    Use case for deleting an organization.

    Business Rules:
    - Actor needs delete_organization (owner only with built-in roles)
    - Cascades to memberships and invitations
    """

    async def execute(self, organization_id: UUID, actor_id: Optional[UUID]) -> None:
        actor_id = require_actor(actor_id)
        await self._run(self._delete, organization_id, actor_id)

    async def _delete(self, organization_id: UUID, actor_id: UUID) -> None:
        organization = await self._get_organization(organization_id)
        await self.authorization.authorize(
            organization.id, actor_id, "delete_organization"
        )
        await self.uow.organizations.delete(organization)
        logger.info(f"Organization {organization_id} deleted by {actor_id}")
