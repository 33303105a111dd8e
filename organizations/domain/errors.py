"""
Organization Domain Errors

Every failure the core can raise, each with a stable ``code`` so callers
(HTTP boundary, CLI, jobs) can map it without string matching.
"""

from typing import Optional


class OrganizationError(Exception):
    """Base class for all organization domain errors"""

    code = "ORGANIZATION_ERROR"
    default_message = "Organization operation failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(OrganizationError):
    code = "CONFIGURATION_ERROR"
    default_message = "Invalid organizations configuration"


# ============================================================================
# Role errors
# ============================================================================


class InvalidRole(OrganizationError):
    code = "INVALID_ROLE"
    default_message = "Invalid role"

    def __init__(self, role: Optional[str] = None, valid_roles=()):
        self.role = role
        if valid_roles:
            message = f"Invalid role: {role}. Must be one of: {', '.join(valid_roles)}"
        else:
            message = f"Invalid role: {role}"
        super().__init__(message)


class OwnerConflict(OrganizationError):
    code = "OWNER_CONFLICT"
    default_message = (
        "Organization already has an owner. Use ownership transfer instead."
    )


class CannotRemoveOwner(OrganizationError):
    code = "CANNOT_REMOVE_OWNER"
    default_message = "Cannot remove the organization owner. Transfer ownership first."


class CannotDemoteOwner(OrganizationError):
    code = "CANNOT_DEMOTE_OWNER"
    default_message = "Cannot demote the organization owner. Transfer ownership first."


class NoOwnerPresent(OrganizationError):
    code = "NO_OWNER_PRESENT"
    default_message = "Organization has no owner"


class CannotTransferToNonAdmin(OrganizationError):
    code = "CANNOT_TRANSFER_TO_NON_ADMIN"
    default_message = "Ownership can only be transferred to an admin"


# ============================================================================
# Actor / authorization errors
# ============================================================================


class MissingActor(OrganizationError):
    code = "MISSING_ACTOR"
    default_message = "An acting user is required for this operation"


class NotAMember(OrganizationError):
    code = "NOT_A_MEMBER"
    default_message = "User is not a member of this organization"


class CannotTransferToNonMember(NotAMember):
    code = "CANNOT_TRANSFER_TO_NON_MEMBER"
    default_message = "Ownership can only be transferred to a member"


class NotAuthorized(OrganizationError):
    code = "NOT_AUTHORIZED"
    default_message = "You are not authorized to perform this action"

    def __init__(
        self,
        message: Optional[str] = None,
        permission: Optional[str] = None,
        required_role: Optional[str] = None,
    ):
        self.permission = permission
        self.required_role = required_role
        super().__init__(message)


class OrganizationLimitReached(OrganizationError):
    code = "ORGANIZATION_LIMIT_REACHED"
    default_message = "Maximum number of owned organizations reached"


class InvalidOrganizationName(OrganizationError):
    code = "INVALID_ORGANIZATION_NAME"
    default_message = "Organization name must not be blank"


# ============================================================================
# Invitation errors
# ============================================================================


class InvitationError(OrganizationError):
    code = "INVITATION_ERROR"
    default_message = "Invitation operation failed"


class InvalidEmail(InvitationError):
    code = "INVALID_EMAIL"
    default_message = "Invalid email address"


class AlreadyAMember(InvitationError):
    code = "ALREADY_A_MEMBER"
    default_message = "User is already a member of this organization"


class CannotInviteAsOwner(InvitationError):
    code = "CANNOT_INVITE_AS_OWNER"
    default_message = (
        "Cannot invite as owner. Invite as admin, then transfer ownership."
    )


class EmailMismatch(InvitationError):
    code = "EMAIL_MISMATCH"
    default_message = "This invitation was sent to a different email address"


class CannotAcceptAsOwner(InvitationError):
    code = "CANNOT_ACCEPT_AS_OWNER"
    default_message = (
        "Cannot accept invitation as owner. Join as admin, then transfer ownership."
    )


class InvitationExpired(InvitationError):
    code = "INVITATION_EXPIRED"
    default_message = "This invitation has expired"


class InvitationAlreadyAccepted(InvitationError):
    code = "INVITATION_ALREADY_ACCEPTED"
    default_message = "This invitation has already been accepted"


# ============================================================================
# Lookup errors
# ============================================================================


class NotFound(OrganizationError):
    code = "NOT_FOUND"
    default_message = "Entity not found"


class OrganizationNotFound(NotFound):
    code = "ORGANIZATION_NOT_FOUND"
    default_message = "Organization not found"


class UserNotFound(NotFound):
    code = "USER_NOT_FOUND"
    default_message = "User not found"


class MembershipNotFound(NotFound):
    code = "MEMBERSHIP_NOT_FOUND"
    default_message = "User is not a member of this organization"


class InvitationNotFound(NotFound):
    code = "INVITATION_NOT_FOUND"
    default_message = "Invitation not found"


# ============================================================================
# Store errors
# ============================================================================


class UniqueViolation(OrganizationError):
    """Raised by repositories when a unique index rejects a write"""

    code = "UNIQUE_VIOLATION"
    default_message = "Unique constraint violated"

    def __init__(self, constraint: str, message: Optional[str] = None):
        self.constraint = constraint
        super().__init__(message or f"Unique constraint violated: {constraint}")


class TokenGenerationError(OrganizationError):
    code = "TOKEN_GENERATION_FAILED"
    default_message = "Could not generate a unique invitation token"
