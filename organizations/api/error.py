from typing import Union

from fastapi import status

from organizations.domain.errors import (
    ConfigurationError,
    NotFound,
    OrganizationError,
    TokenGenerationError,
)

UNPROCESSABLE = 422

# Codes not listed here fall back to 400
STATUS_BY_CODE = {
    "MISSING_ACTOR": status.HTTP_401_UNAUTHORIZED,
    "NOT_A_MEMBER": status.HTTP_403_FORBIDDEN,
    "NOT_AUTHORIZED": status.HTTP_403_FORBIDDEN,
    "EMAIL_MISMATCH": status.HTTP_403_FORBIDDEN,
    "OWNER_CONFLICT": status.HTTP_409_CONFLICT,
    "CANNOT_REMOVE_OWNER": status.HTTP_409_CONFLICT,
    "CANNOT_DEMOTE_OWNER": status.HTTP_409_CONFLICT,
    "NO_OWNER_PRESENT": status.HTTP_409_CONFLICT,
    "ALREADY_A_MEMBER": status.HTTP_409_CONFLICT,
    "INVITATION_ALREADY_ACCEPTED": status.HTTP_409_CONFLICT,
    "ORGANIZATION_LIMIT_REACHED": status.HTTP_409_CONFLICT,
    "UNIQUE_VIOLATION": status.HTTP_409_CONFLICT,
    "INVITATION_EXPIRED": status.HTTP_410_GONE,
    "INVALID_ROLE": UNPROCESSABLE,
    "INVALID_EMAIL": UNPROCESSABLE,
    "INVALID_ORGANIZATION_NAME": UNPROCESSABLE,
    "CANNOT_INVITE_AS_OWNER": UNPROCESSABLE,
    "CANNOT_ACCEPT_AS_OWNER": UNPROCESSABLE,
    "CANNOT_TRANSFER_TO_NON_MEMBER": UNPROCESSABLE,
    "CANNOT_TRANSFER_TO_NON_ADMIN": UNPROCESSABLE,
}


class ClientError(Exception):
    def __init__(
        self, base_error: OrganizationError, status_code: int = status.HTTP_400_BAD_REQUEST
    ):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: OrganizationError):
        self.base_error = base_error
        super().__init__(base_error.message)


def status_for(error: OrganizationError) -> int:
    if error.code in STATUS_BY_CODE:
        return STATUS_BY_CODE[error.code]
    if isinstance(error, NotFound):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


def to_http_error(error: OrganizationError) -> Union[ClientError, ServerError]:
    """Wrap a domain error; configuration and token failures are server faults"""
    if isinstance(error, (ConfigurationError, TokenGenerationError)):
        return ServerError(error)
    return ClientError(error, status_for(error))
