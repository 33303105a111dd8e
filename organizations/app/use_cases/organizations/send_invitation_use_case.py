"""
Send Invitation Use Case

Handles inviting an email address to join an organization with a role.
"""

import logging
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, TypeAdapter, ValidationError

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import CallbackEvent, Invitation, normalize_email
from organizations.domain.errors import AlreadyAMember, CannotInviteAsOwner, InvalidEmail
from organizations.domain.roles import OWNER

from ..base import OrganizationUseCase

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)


def validate_email(email: Optional[str]) -> str:
    """Trimmed, lowercased and syntactically valid email, else InvalidEmail"""
    normalized = normalize_email(email)
    try:
        _email_adapter.validate_python(normalized)
    except ValidationError:
        raise InvalidEmail(f"Invalid email address: {email!r}")
    return normalized


class SendInvitationUseCase(OrganizationUseCase):
    """
    Use case for inviting an email address to an organization.

    Business Rules:
    - Actor must be a member holding invite_members
    - Owner role cannot be invited; role must be registered
    - Email is trimmed and lowercased before any lookup
    - Email of an existing member fails with AlreadyAMember
    - A pending invitation for the same email is returned unchanged
      (token and expiry are NOT touched)
    - An expired one is reactivated: new token, fresh expiry
    - Otherwise a new invitation with a unique token is created
    - Dispatches member_invited when an invitation is created or reactivated
    """

    async def execute(
        self,
        organization_id: UUID,
        email: str,
        actor_id: Optional[UUID],
        role: Optional[str] = None,
    ) -> Invitation:
        """
        Execute send invitation use case.

        Args:
            organization_id: Inviting organization
            email: Address to invite
            actor_id: User sending the invitation
            role: Role granted on acceptance (defaults to the configured role)

        Returns:
            The pending Invitation
        """
        actor_id = require_actor(actor_id)
        return await self._run(self._send, organization_id, email, actor_id, role)

    async def _send(
        self,
        organization_id: UUID,
        email: str,
        actor_id: UUID,
        role: Optional[str],
    ) -> Invitation:
        organization = await self._get_organization(organization_id)
        await self.authorization.authorize(organization.id, actor_id, "invite_members")

        role = (role or self.settings.default_invitation_role).strip().lower()
        if role == OWNER:
            raise CannotInviteAsOwner()
        role = self.roles.validate(role)

        email = validate_email(email)

        if await self.uow.memberships.get_member_by_email(organization.id, email):
            raise AlreadyAMember()

        now = self.clock.now()
        invitation = await self.uow.invitations.get_open_by_organization_and_email(
            organization.id, email
        )
        if invitation is not None and invitation.is_pending(now):
            return invitation

        token = await self.token_issuer.issue(self.uow.invitations.token_exists)
        if invitation is not None:
            invitation.token = token
            invitation.expires_at = self._expires_at(now)
            invitation.updated_at = now
            invitation = await self.uow.invitations.update(invitation)
            logger.info(f"Invitation {invitation.id} reactivated by {actor_id}")
        else:
            invitation = await self.uow.invitations.create(
                Invitation(
                    organization_id=organization.id,
                    invited_by_id=actor_id,
                    email=email,
                    role=role,
                    token=token,
                    expires_at=self._expires_at(now),
                    created_at=now,
                    updated_at=now,
                )
            )
            logger.info(
                f"Invitation {invitation.id} sent to organization {organization.id} "
                f"as {role} by {actor_id}"
            )

        invited_by = await self.uow.users.get_by_id(actor_id)
        self._emit(
            CallbackEvent.member_invited,
            organization=organization,
            invitation=invitation,
            invited_by=invited_by,
        )
        return invitation
