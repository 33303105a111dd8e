"""
Revoke Invitation Use Case
"""

import logging
from typing import Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.errors import InvitationAlreadyAccepted, InvitationNotFound

from ..base import OrganizationUseCase

logger = logging.getLogger(__name__)


class RevokeInvitationUseCase(OrganizationUseCase):
    """
    Business Rules:
    - Actor needs invite_members
    - Only invitations that were never accepted can be revoked
    - Revoking deletes the row, freeing the email for a new invitation
    """

    async def execute(self, invitation_id: UUID, actor_id: Optional[UUID]) -> None:
        actor_id = require_actor(actor_id)
        await self._run(self._revoke, invitation_id, actor_id)

    async def _revoke(self, invitation_id: UUID, actor_id: UUID) -> None:
        invitation = await self.uow.invitations.get_by_id(invitation_id, for_update=True)
        if invitation is None:
            raise InvitationNotFound()

        await self.authorization.authorize(
            invitation.organization_id, actor_id, "invite_members"
        )

        if invitation.is_accepted:
            raise InvitationAlreadyAccepted("Cannot revoke an accepted invitation")

        await self.uow.invitations.delete(invitation)
        logger.info(f"Invitation {invitation_id} revoked by {actor_id}")
