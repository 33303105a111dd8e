"""
Accept Invitation Use Case

Turns a pending invitation into a membership for the accepting user.
"""

import logging
from typing import Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import (
    AcceptanceStatus,
    CallbackEvent,
    Invitation,
    Membership,
)
from organizations.domain.errors import (
    CannotAcceptAsOwner,
    EmailMismatch,
    InvitationAlreadyAccepted,
    InvitationExpired,
    InvitationNotFound,
)
from organizations.domain.roles import OWNER

from ..base import OrganizationUseCase
from .dtos import InvitationAcceptance

logger = logging.getLogger(__name__)


class AcceptInvitationUseCase(OrganizationUseCase):
    """
    Use case for accepting an invitation.

    Business Rules:
    - The accepting user is explicit and must exist
    - The user's registered email must match the invitation email
      (case-insensitive) unless skip_email_validation is set
    - The invitation row is locked before its state is re-checked
    - Already accepted: the user's existing membership is returned; if that
      membership was removed since, InvitationAlreadyAccepted (an accepted
      invitation never re-grants access)
    - Expired invitations cannot be accepted (resend first)
    - Owner role can never be granted through an invitation
    - A user who is already a member (joined another way) gets the
      invitation marked accepted and keeps the existing membership
    - Otherwise a membership with the invitation's role and inviter is
      created and member_joined is dispatched
    """

    async def execute(
        self,
        token: str,
        user_id: Optional[UUID],
        skip_email_validation: bool = False,
    ) -> InvitationAcceptance:
        """
        Execute accept invitation use case.

        Args:
            token: Invitation token from the acceptance link
            user_id: User accepting the invitation
            skip_email_validation: Allow a user with a different email
                (administrative acceptance)

        Returns:
            InvitationAcceptance with status accepted or already_member
        """
        user_id = require_actor(user_id)
        return await self._run(self._accept, token, user_id, skip_email_validation)

    async def _accept(
        self, token: str, user_id: UUID, skip_email_validation: bool
    ) -> InvitationAcceptance:
        user = await self._get_user(user_id)

        invitation = await self.uow.invitations.get_by_token(token) if token else None
        if invitation is None:
            raise InvitationNotFound()

        if not skip_email_validation and not invitation.matches_email(user.email):
            raise EmailMismatch()

        invitation = await self.uow.invitations.get_by_token(token, for_update=True)
        if invitation is None:
            raise InvitationNotFound()

        existing = await self.uow.memberships.get_by_user_and_organization(
            user_id, invitation.organization_id
        )

        if invitation.is_accepted:
            if existing is None:
                raise InvitationAlreadyAccepted()
            return self._already_member(invitation, existing)

        now = self.clock.now()
        if invitation.is_expired(now):
            raise InvitationExpired()

        if invitation.role == OWNER:
            raise CannotAcceptAsOwner()

        invitation.accepted_at = now
        invitation.updated_at = now

        if existing is not None:
            invitation = await self.uow.invitations.update(invitation)
            logger.info(
                f"Invitation {invitation.id} accepted by existing member {user_id}"
            )
            return self._already_member(invitation, existing)

        membership = await self.uow.memberships.create(
            Membership(
                organization_id=invitation.organization_id,
                user_id=user_id,
                role=invitation.role,
                invited_by_id=invitation.invited_by_id,
                created_at=now,
                updated_at=now,
            )
        )
        invitation = await self.uow.invitations.update(invitation)

        organization = await self.uow.organizations.get_by_id(invitation.organization_id)
        self._emit(
            CallbackEvent.member_joined,
            organization=organization,
            membership=membership,
            user=user,
            invitation=invitation,
        )
        logger.info(
            f"Invitation {invitation.id} accepted: {user_id} joined organization "
            f"{invitation.organization_id} as {membership.role}"
        )
        return InvitationAcceptance(
            status=AcceptanceStatus.accepted,
            invitation=invitation,
            membership=membership,
        )

    @staticmethod
    def _already_member(
        invitation: Invitation, membership: Membership
    ) -> InvitationAcceptance:
        return InvitationAcceptance(
            status=AcceptanceStatus.already_member,
            invitation=invitation,
            membership=membership,
        )
