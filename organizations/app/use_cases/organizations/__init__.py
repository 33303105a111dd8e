"""
Organization Use Cases

Organization lifecycle and membership mutations.
"""

from .add_member_use_case import AddMemberUseCase
from .change_role_use_case import ChangeRoleUseCase
from .create_organization_use_case import CreateOrganizationUseCase
from .delete_organization_use_case import DeleteOrganizationUseCase
from .remove_member_use_case import RemoveMemberUseCase
from .rename_organization_use_case import RenameOrganizationUseCase
from .send_invitation_use_case import SendInvitationUseCase
from .transfer_ownership_use_case import TransferOwnershipUseCase

__all__ = [
    "CreateOrganizationUseCase",
    "RenameOrganizationUseCase",
    "DeleteOrganizationUseCase",
    "AddMemberUseCase",
    "RemoveMemberUseCase",
    "ChangeRoleUseCase",
    "TransferOwnershipUseCase",
    "SendInvitationUseCase",
]
