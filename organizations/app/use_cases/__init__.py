"""
Use Cases

Organized into domain folders:
- organizations/: organization lifecycle, membership mutations, sending invitations
- invitations/: accepting, resending and revoking invitations
- queries/: read-only listings and lookups
"""

from .invitations import (
    AcceptInvitationUseCase,
    InvitationAcceptance,
    ResendInvitationUseCase,
    RevokeInvitationUseCase,
)
from .organizations import (
    AddMemberUseCase,
    ChangeRoleUseCase,
    CreateOrganizationUseCase,
    DeleteOrganizationUseCase,
    RemoveMemberUseCase,
    RenameOrganizationUseCase,
    SendInvitationUseCase,
    TransferOwnershipUseCase,
)
from .queries import (
    GetOrganizationUseCase,
    ListMembersUseCase,
    ListPendingInvitationsUseCase,
    ListUserInvitationsUseCase,
    ListUserOrganizationsUseCase,
)

__all__ = [
    # Organizations
    "CreateOrganizationUseCase",
    "RenameOrganizationUseCase",
    "DeleteOrganizationUseCase",
    "AddMemberUseCase",
    "RemoveMemberUseCase",
    "ChangeRoleUseCase",
    "TransferOwnershipUseCase",
    "SendInvitationUseCase",
    # Invitations
    "AcceptInvitationUseCase",
    "ResendInvitationUseCase",
    "RevokeInvitationUseCase",
    "InvitationAcceptance",
    # Queries
    "GetOrganizationUseCase",
    "ListUserOrganizationsUseCase",
    "ListMembersUseCase",
    "ListPendingInvitationsUseCase",
    "ListUserInvitationsUseCase",
]
