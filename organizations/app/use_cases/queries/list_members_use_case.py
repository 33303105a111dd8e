"""
List Members Use Case
"""

from typing import List, Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import Membership

from ..base import OrganizationUseCase


class ListMembersUseCase(OrganizationUseCase):
    """
    Business Rules:
    - Actor needs view_members
    - Highest role first; members of equal role in join order
    - Roles missing from the hierarchy sort last
    """

    async def execute(
        self, organization_id: UUID, actor_id: Optional[UUID]
    ) -> List[Membership]:
        actor_id = require_actor(actor_id)
        return await self._run(self._list, organization_id, actor_id)

    async def _list(self, organization_id: UUID, actor_id: UUID) -> List[Membership]:
        organization = await self._get_organization(organization_id)
        await self.authorization.authorize(organization.id, actor_id, "view_members")

        memberships = await self.uow.memberships.get_by_organization_id(organization.id)
        return sorted(memberships, key=self._rank, reverse=True)

    def _rank(self, membership: Membership) -> int:
        if not self.roles.is_valid(membership.role):
            return -1
        return self.roles.rank(membership.role)
