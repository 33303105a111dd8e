"""
List Invitations Use Cases

Pending means neither accepted nor expired at the clock's now.
"""

from typing import List, Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import Invitation

from ..base import OrganizationUseCase


class ListPendingInvitationsUseCase(OrganizationUseCase):
    """
    Business Rules:
    - Actor needs invite_members
    """

    async def execute(
        self, organization_id: UUID, actor_id: Optional[UUID]
    ) -> List[Invitation]:
        actor_id = require_actor(actor_id)
        return await self._run(self._list, organization_id, actor_id)

    async def _list(self, organization_id: UUID, actor_id: UUID) -> List[Invitation]:
        organization = await self._get_organization(organization_id)
        await self.authorization.authorize(organization.id, actor_id, "invite_members")
        return await self.uow.invitations.get_pending_by_organization_id(
            organization.id, self.clock.now()
        )


class ListUserInvitationsUseCase(OrganizationUseCase):
    """Pending invitations addressed to the actor's email, across organizations"""

    async def execute(self, actor_id: Optional[UUID]) -> List[Invitation]:
        actor_id = require_actor(actor_id)
        return await self._run(self._list, actor_id)

    async def _list(self, actor_id: UUID) -> List[Invitation]:
        user = await self._get_user(actor_id)
        return await self.uow.invitations.get_pending_by_email(user.email, self.clock.now())
