# admin_console/core/permissions.py
"""
Role and permission rules for admins and office users.

Everything here is a pure function over stored documents (plain dicts), so the
same rules apply whether the admin record came from an admin token or was
resolved from an office-user session.
"""
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

ROLE_ADMIN = "admin"
ROLE_SUPER_ADMIN = "super_admin"


class Capability(str, Enum):
    DASHBOARD = "dashboard"
    USER_MANAGEMENT = "userManagement"
    PINCODE_MANAGEMENT = "pincodeManagement"
    ADDRESS_FORMS = "addressForms"
    REPORTS = "reports"
    SETTINGS = "settings"


# always on for every admin, never configurable
BASELINE_CAPABILITIES = frozenset({Capability.DASHBOARD, Capability.REPORTS, Capability.SETTINGS})
# the flags a super admin actually chooses
ASSIGNABLE_CAPABILITIES = frozenset(
    {Capability.USER_MANAGEMENT, Capability.PINCODE_MANAGEMENT, Capability.ADDRESS_FORMS}
)

CapabilityLike = Union[Capability, str]


def _flag_name(capability: CapabilityLike) -> str:
    return capability.value if isinstance(capability, Capability) else str(capability)


def is_super_admin(admin: Optional[Mapping[str, Any]]) -> bool:
    return bool(admin) and admin.get("role") == ROLE_SUPER_ADMIN


def can_access(admin: Optional[Mapping[str, Any]], capability: CapabilityLike) -> bool:
    """
    Super admins pass every check. Anyone else needs the stored flag to be
    exactly True; missing flags and unknown capability names deny.
    """
    if not admin:
        return False
    if is_super_admin(admin):
        return True
    permissions = admin.get("permissions") or {}
    if not isinstance(permissions, Mapping):
        return False
    return permissions.get(_flag_name(capability)) is True


def can_assign(admin: Optional[Mapping[str, Any]]) -> bool:
    """Whether the admin may change office users' permission maps."""
    if not admin:
        return False
    return is_super_admin(admin) or admin.get("canAssignPermissions") is True


def normalize_admin_permissions(requested: Optional[Mapping[str, Any]] = None) -> Dict[str, bool]:
    """
    Build the full permission map to persist for an admin.

    Assignable flags come from the request (absent means False); baseline flags
    are forced True whatever the request says.
    """
    requested = requested or {}
    normalized = {cap.value: requested.get(cap.value) is True for cap in ASSIGNABLE_CAPABILITIES}
    for cap in BASELINE_CAPABILITIES:
        normalized[cap.value] = True
    return {cap.value: normalized[cap.value] for cap in Capability}


def full_admin_permissions() -> Dict[str, bool]:
    return {cap.value: True for cap in Capability}


def default_office_permissions() -> Dict[str, bool]:
    return {cap.value: False for cap in Capability}


def normalize_office_permissions(requested: Optional[Mapping[str, Any]] = None) -> Dict[str, bool]:
    # office users have no baseline; every flag is taken as given
    requested = requested or {}
    return {cap.value: requested.get(cap.value) is True for cap in Capability}


def can_office_access(office_user: Optional[Mapping[str, Any]], capability: CapabilityLike) -> bool:
    """Office-only routes consult the office user's own map, never an admin's."""
    if not office_user:
        return False
    permissions = office_user.get("permissions") or {}
    if not isinstance(permissions, Mapping):
        return False
    return permissions.get(_flag_name(capability)) is True
