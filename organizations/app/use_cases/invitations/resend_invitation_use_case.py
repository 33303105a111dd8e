"""
Resend Invitation Use Case

Rotates the token and restarts the expiry window. This is also how an
expired invitation is brought back to pending.
"""

import logging
from typing import Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import Invitation
from organizations.domain.errors import InvitationAlreadyAccepted, InvitationNotFound

from ..base import OrganizationUseCase

logger = logging.getLogger(__name__)


class ResendInvitationUseCase(OrganizationUseCase):
    """
    Use case for resending an invitation.

    Business Rules:
    - Actor needs invite_members in the invitation's organization
    - Accepted invitations cannot be resent
    - Token is regenerated (collision-checked) and expiry reset, even when
      the invitation has already expired
    """

    async def execute(
        self, invitation_id: UUID, actor_id: Optional[UUID]
    ) -> Invitation:
        actor_id = require_actor(actor_id)
        return await self._run(self._resend, invitation_id, actor_id)

    async def _resend(self, invitation_id: UUID, actor_id: UUID) -> Invitation:
        invitation = await self.uow.invitations.get_by_id(invitation_id, for_update=True)
        if invitation is None:
            raise InvitationNotFound()

        await self.authorization.authorize(
            invitation.organization_id, actor_id, "invite_members"
        )

        if invitation.is_accepted:
            raise InvitationAlreadyAccepted("Cannot resend an accepted invitation")

        now = self.clock.now()
        invitation.token = await self.token_issuer.issue(
            self.uow.invitations.token_exists
        )
        invitation.expires_at = self._expires_at(now)
        invitation.updated_at = now
        invitation = await self.uow.invitations.update(invitation)

        logger.info(f"Invitation {invitation.id} resent by {actor_id}")
        return invitation
