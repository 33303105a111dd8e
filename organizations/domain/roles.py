"""
Role Hierarchy

Ordered registry of roles and the capabilities each role implies.

Built-in order (lowest to highest): viewer < member < admin < owner.
Capabilities are cumulative: a role holds every capability of the roles
ranked below it, plus its own.

Custom roles are registered at configuration time, each inserted directly
above the role it inherits from, and the hierarchy is frozen afterwards.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional

from .errors import ConfigurationError, InvalidRole

logger = logging.getLogger(__name__)

OWNER = "owner"
ADMIN = "admin"
MEMBER = "member"
VIEWER = "viewer"

# Own capabilities per built-in role; inheritance is resolved by rank
DEFAULT_ROLES = (
    (VIEWER, ("view_organization", "view_members")),
    (
        MEMBER,
        ("create_resources", "edit_own_resources", "delete_own_resources"),
    ),
    (
        ADMIN,
        (
            "invite_members",
            "remove_members",
            "edit_member_roles",
            "manage_settings",
            "view_billing",
        ),
    ),
    (OWNER, ("manage_billing", "transfer_ownership", "delete_organization")),
)


@dataclass(frozen=True)
class RoleDefinition:
    """A role name and the capabilities it adds on top of lower ranks"""

    name: str
    capabilities: FrozenSet[str] = field(default_factory=frozenset)


class RoleHierarchy:
    """
    Ordered role registry.

    Business Rules:
    - Owner is always the highest role
    - A custom role sits directly above the role it inherits from
    - Lookups for unknown roles are never errors: they answer False / None
    - Registration is only allowed before freeze()
    """

    def __init__(self, definitions: Optional[Iterable[RoleDefinition]] = None):
        if definitions is None:
            definitions = [
                RoleDefinition(name, frozenset(caps)) for name, caps in DEFAULT_ROLES
            ]
        self._definitions: List[RoleDefinition] = list(definitions)
        self._frozen = False
        self._rebuild()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        name: str,
        inherits: Optional[str] = None,
        capabilities: Iterable[str] = (),
    ) -> RoleDefinition:
        """
        Insert a custom role directly above ``inherits``.

        Without ``inherits`` the role becomes the lowest rank.
        """
        if self._frozen:
            raise ConfigurationError("Role hierarchy is frozen; register roles at startup")

        name = _normalize(name)
        if not name:
            raise ConfigurationError("Role name must not be empty")
        if name in self._ranks:
            raise ConfigurationError(f"Role already registered: {name}")

        if inherits is None:
            position = 0
        else:
            parent = _normalize(inherits)
            if parent not in self._ranks:
                raise ConfigurationError(f"Unknown parent role: {inherits}")
            if parent == OWNER:
                raise ConfigurationError("Owner must remain the highest role")
            position = self._ranks[parent] + 1

        definition = RoleDefinition(
            name, frozenset(_normalize(cap) for cap in capabilities)
        )
        self._definitions.insert(position, definition)
        self._rebuild()
        logger.debug(f"Registered role {name} at rank {position}")
        return definition

    def freeze(self) -> "RoleHierarchy":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def roles(self) -> List[str]:
        """Role names ordered from lowest to highest rank"""
        return [definition.name for definition in self._definitions]

    def is_valid(self, role: Optional[str]) -> bool:
        return role is not None and _normalize(role) in self._ranks

    def rank(self, role: str) -> int:
        try:
            return self._ranks[_normalize(role)]
        except KeyError:
            raise InvalidRole(role, self.roles)

    def validate(self, role: Optional[str]) -> str:
        """Return the normalized role name or raise InvalidRole"""
        if not self.is_valid(role):
            raise InvalidRole(role, self.roles)
        return _normalize(role)

    def at_least(self, role: Optional[str], threshold: Optional[str]) -> bool:
        if not self.is_valid(role) or not self.is_valid(threshold):
            return False
        return self.rank(role) >= self.rank(threshold)

    def compare(self, role_a: str, role_b: str) -> int:
        """1 if role_a outranks role_b, -1 if lower, 0 if equal"""
        rank_a, rank_b = self.rank(role_a), self.rank(role_b)
        if rank_a == rank_b:
            return 0
        return 1 if rank_a > rank_b else -1

    def permissions_for(self, role: Optional[str]) -> FrozenSet[str]:
        if not self.is_valid(role):
            return frozenset()
        return self._permissions[_normalize(role)]

    def has_permission(self, role: Optional[str], permission: Optional[str]) -> bool:
        if permission is None:
            return False
        return _normalize(permission) in self.permissions_for(role)

    def lowest_role_with(self, permission: str) -> Optional[str]:
        for name in self.roles:
            if self.has_permission(name, permission):
                return name
        return None

    def higher_role(self, role: Optional[str]) -> Optional[str]:
        if not self.is_valid(role):
            return None
        rank = self.rank(role)
        if rank + 1 >= len(self._definitions):
            return None
        return self._definitions[rank + 1].name

    def lower_role(self, role: Optional[str]) -> Optional[str]:
        if not self.is_valid(role):
            return None
        rank = self.rank(role)
        if rank == 0:
            return None
        return self._definitions[rank - 1].name

    def __contains__(self, role: object) -> bool:
        return isinstance(role, str) and self.is_valid(role)

    def __len__(self) -> int:
        return len(self._definitions)

    def _rebuild(self) -> None:
        ranks: Dict[str, int] = {}
        permissions: Dict[str, FrozenSet[str]] = {}
        accumulated: FrozenSet[str] = frozenset()
        for index, definition in enumerate(self._definitions):
            ranks[definition.name] = index
            accumulated = accumulated | definition.capabilities
            permissions[definition.name] = accumulated
        if self._definitions and self._definitions[-1].name != OWNER:
            raise ConfigurationError("Owner must remain the highest role")
        self._ranks = ranks
        self._permissions = permissions


def _normalize(value: str) -> str:
    return str(value).strip().lower()


def build_role_hierarchy(custom_roles: Optional[Iterable[dict]] = None) -> RoleHierarchy:
    """
    Build and freeze a hierarchy from configuration.

    Each custom role is a mapping with ``name``, optional ``inherits`` and
    optional ``capabilities``.
    """
    hierarchy = RoleHierarchy()
    for entry in custom_roles or ():
        if not isinstance(entry, dict) or "name" not in entry:
            raise ConfigurationError(f"Invalid custom role definition: {entry!r}")
        hierarchy.register(
            entry["name"],
            inherits=entry.get("inherits"),
            capabilities=entry.get("capabilities") or (),
        )
    return hierarchy.freeze()


_default_hierarchy: RoleHierarchy = build_role_hierarchy()


def get_role_hierarchy() -> RoleHierarchy:
    """Process-wide hierarchy used when a use case is not given one"""
    return _default_hierarchy


def configure_role_hierarchy(hierarchy: RoleHierarchy) -> RoleHierarchy:
    """Install the process-wide hierarchy (startup only)"""
    global _default_hierarchy
    _default_hierarchy = hierarchy.freeze()
    return _default_hierarchy
