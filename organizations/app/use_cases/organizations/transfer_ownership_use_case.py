"""
Transfer Ownership Use Case

Moves the single owner role to another admin-or-higher member.
"""

import logging
from typing import Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import CallbackEvent, Membership
from organizations.domain.errors import (
    CannotTransferToNonAdmin,
    CannotTransferToNonMember,
    NoOwnerPresent,
)
from organizations.domain.roles import ADMIN, OWNER

from ..base import OrganizationUseCase

logger = logging.getLogger(__name__)


class TransferOwnershipUseCase(OrganizationUseCase):
    """
    Use case for transferring organization ownership.

    Business Rules:
    - Organization must currently have an owner (NoOwnerPresent)
    - Actor needs transfer_ownership
    - Target already owner: no-op, returns the owner membership
    - Target must be a member ranked admin or higher
    - Old owner becomes admin, target becomes owner, in one transaction
    - Dispatches ownership_transferred
    """

    async def execute(
        self, organization_id: UUID, user_id: UUID, actor_id: Optional[UUID]
    ) -> Membership:
        """
        Execute transfer ownership use case.

        Args:
            organization_id: Organization to transfer
            user_id: New owner
            actor_id: User performing the transfer

        Returns:
            The new owner's Membership
        """
        actor_id = require_actor(actor_id)
        return await self._run(self._transfer, organization_id, user_id, actor_id)

    async def _transfer(
        self, organization_id: UUID, user_id: UUID, actor_id: UUID
    ) -> Membership:
        organization = await self._get_organization(organization_id)

        owner = await self.uow.memberships.get_owner(organization.id)
        if owner is None:
            raise NoOwnerPresent()

        await self.authorization.authorize(
            organization.id, actor_id, "transfer_ownership"
        )

        if owner.user_id == user_id:
            return owner

        target = await self.uow.memberships.get_by_user_and_organization(
            user_id, organization.id
        )
        if target is None:
            raise CannotTransferToNonMember()
        if not self.roles.at_least(target.role, ADMIN):
            raise CannotTransferToNonAdmin()

        now = self.clock.now()
        # Demotion is flushed first so the single-owner index never sees two owners
        owner.role = ADMIN
        owner.updated_at = now
        await self.uow.memberships.update(owner)

        target.role = OWNER
        target.updated_at = now
        target = await self.uow.memberships.update(target)

        old_owner = await self.uow.users.get_by_id(owner.user_id)
        new_owner = await self.uow.users.get_by_id(user_id)
        self._emit(
            CallbackEvent.ownership_transferred,
            organization=organization,
            old_owner=old_owner,
            new_owner=new_owner,
        )
        logger.info(
            f"Ownership of organization {organization.id} transferred "
            f"{owner.user_id} -> {user_id}"
        )
        return target
