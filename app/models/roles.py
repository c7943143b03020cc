"""
app/models/roles.py

Purpose: Membership roles

- Single source of truth for the four company roles
- Which roles may manage company data and membership
- Which roles a manager may hand out
"""

from enum import Enum
from typing import Optional, Dict, FrozenSet
from dataclasses import dataclass


class Role(str, Enum):
    """
    Membership roles, highest permission first.
    """
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


@dataclass(frozen=True)
class RoleMetadata:
    name: Role
    label: str
    can_manage: bool = False


ROLE_METADATA: Dict[Role, RoleMetadata] = {
    Role.OWNER: RoleMetadata(name=Role.OWNER, label="Owner", can_manage=True),
    Role.ADMIN: RoleMetadata(name=Role.ADMIN, label="Administrator", can_manage=True),
    Role.MEMBER: RoleMetadata(name=Role.MEMBER, label="Member"),
    Role.VIEWER: RoleMetadata(name=Role.VIEWER, label="Viewer"),
}

MANAGER_ROLES: FrozenSet[Role] = frozenset(
    role for role, meta in ROLE_METADATA.items() if meta.can_manage
)


def parse_role(value: Optional[str]) -> Optional[Role]:
    """
    Returns the Role for a stored value, or None for unknown values.
    """
    try:
        return Role(value)
    except ValueError:
        return None


def can_manage(role: Optional[str]) -> bool:
    """
    Owner and admin may update the company and manage its members.
    """
    parsed = parse_role(role)
    return parsed is not None and parsed in MANAGER_ROLES


def can_grant(granter: Optional[str], role: Role) -> bool:
    """
    Whether a member holding `granter` may invite someone as `role`.
    Only an owner can create another owner.
    """
    if not can_manage(granter):
        return False
    if role == Role.OWNER:
        return parse_role(granter) == Role.OWNER
    return True


def get_role_label(role: str) -> str:
    parsed = parse_role(role)
    return ROLE_METADATA[parsed].label if parsed else role
