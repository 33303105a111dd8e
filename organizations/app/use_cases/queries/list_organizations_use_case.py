"""
List User Organizations Use Case
"""

from typing import List, Optional
from uuid import UUID

from organizations.app.services.authorization import require_actor
from organizations.domain.entities import Organization

from ..base import OrganizationUseCase


class ListUserOrganizationsUseCase(OrganizationUseCase):
    """Every organization the actor belongs to, whatever the role"""

    async def execute(self, actor_id: Optional[UUID]) -> List[Organization]:
        actor_id = require_actor(actor_id)
        return await self._run(self.uow.organizations.get_by_member, actor_id)
