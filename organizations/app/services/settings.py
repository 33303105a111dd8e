"""
Organization Settings

Read-only knobs the use cases consult at call time.
"""

from datetime import timedelta
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from organizations.domain.errors import ConfigurationError
from organizations.domain.roles import MEMBER, OWNER, RoleHierarchy

DEFAULT_INVITATION_EXPIRY = timedelta(days=7)


class OrganizationSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # None means invitations never expire
    invitation_expiry: Optional[timedelta] = DEFAULT_INVITATION_EXPIRY
    default_invitation_role: str = MEMBER
    max_organizations_per_user: Optional[int] = Field(default=None, ge=1)
    custom_roles: List[Dict[str, Any]] = Field(default_factory=list)

    @field_validator("invitation_expiry")
    @classmethod
    def _positive_expiry(cls, value: Optional[timedelta]) -> Optional[timedelta]:
        if value is not None and value <= timedelta(0):
            raise ValueError("invitation_expiry must be positive or None")
        return value

    @field_validator("default_invitation_role")
    @classmethod
    def _invitable_role(cls, value: str) -> str:
        value = value.strip().lower()
        if value == OWNER:
            raise ValueError("default_invitation_role cannot be owner")
        return value

    @classmethod
    def from_config(cls, config) -> "OrganizationSettings":
        """Build settings from an ApplicationConfig-style object"""
        expiry_days = getattr(config, "INVITATION_EXPIRY_DAYS", 7)
        try:
            return cls(
                invitation_expiry=(
                    None if expiry_days is None else timedelta(days=expiry_days)
                ),
                default_invitation_role=getattr(
                    config, "DEFAULT_INVITATION_ROLE", MEMBER
                ),
                max_organizations_per_user=getattr(
                    config, "MAX_ORGANIZATIONS_PER_USER", None
                ),
                custom_roles=getattr(config, "CUSTOM_ROLES", None) or [],
            )
        # timedelta rejects non-numeric days before pydantic sees them
        except (ValidationError, TypeError, ValueError, OverflowError) as exc:
            raise ConfigurationError(f"Invalid organizations configuration: {exc}")

    def check_roles(self, roles: RoleHierarchy) -> None:
        """Fail startup when the default invitation role is not in ``roles``"""
        if self.default_invitation_role not in roles:
            raise ConfigurationError(
                f"Unknown default invitation role: {self.default_invitation_role}"
            )
