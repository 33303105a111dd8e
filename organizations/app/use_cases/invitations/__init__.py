"""
Invitation Use Cases

Invitation lifecycle after it has been sent.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .dtos import InvitationAcceptance
from .resend_invitation_use_case import ResendInvitationUseCase
from .revoke_invitation_use_case import RevokeInvitationUseCase

__all__ = [
    "AcceptInvitationUseCase",
    "ResendInvitationUseCase",
    "RevokeInvitationUseCase",
    "InvitationAcceptance",
]
