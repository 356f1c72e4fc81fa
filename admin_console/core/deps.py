# admin_console/core/deps.py
import logging
from typing import Any, Callable, Dict, Optional

from bson import ObjectId
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from admin_console.core.errors import AccountInactive, AuthenticationError, AuthorizationError, MissingToken
from admin_console.core.permissions import (
    Capability,
    can_access,
    can_assign,
    can_office_access,
    is_super_admin,
)
from admin_console.core.security import (
    SUBJECT_ADMIN,
    SUBJECT_OFFICE,
    verify_access_token,
)
from admin_console.db.mongo import ADMINS, NO_PASSWORD, OFFICE_USERS, get_db
from admin_console.services.identity_service import IdentityService

logger = logging.getLogger(__name__)

# auto_error off so a missing header is reported as MissingToken
bearer_scheme = HTTPBearer(auto_error=False)


async def _bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise MissingToken()
    return credentials.credentials


async def _load(collection: str, subject_id: str) -> Optional[Dict[str, Any]]:
    if not ObjectId.is_valid(subject_id):
        return None
    return await get_db()[collection].find_one({"_id": ObjectId(subject_id)}, NO_PASSWORD)


async def _active_admin(subject_id: str) -> Dict[str, Any]:
    admin_doc = await _load(ADMINS, subject_id)
    if not admin_doc:
        raise AuthenticationError("Invalid token. Admin not found.")
    if not admin_doc.get("isActive", True):
        raise AccountInactive("Admin account is deactivated.")
    return admin_doc


async def _active_office_user(subject_id: str) -> Dict[str, Any]:
    user_doc = await _load(OFFICE_USERS, subject_id)
    if not user_doc:
        raise AuthenticationError("Invalid token. User not found.")
    if not user_doc.get("isActive", True):
        raise AccountInactive("User account is deactivated.")
    return user_doc


async def get_current_admin(token: str = Depends(_bearer_token)) -> Dict[str, Any]:
    """
    Admin tokens only. Raises a 401-class error on missing/expired/invalid
    tokens, office tokens, and missing or inactive admins.
    """
    claims = verify_access_token(token, allowed_types=(SUBJECT_ADMIN,))
    return await _active_admin(claims.subject_id)


async def get_current_office_user(token: str = Depends(_bearer_token)) -> Dict[str, Any]:
    claims = verify_access_token(token, allowed_types=(SUBJECT_OFFICE,))
    return await _active_office_user(claims.subject_id)


async def get_admin_or_office_admin(token: str = Depends(_bearer_token)) -> Dict[str, Any]:
    """
    Accept an admin token, or an office token whose user also has an active
    admin record under the same email. Either way the admin record is returned
    and its permissions are the ones that count.

    A valid office token without a usable admin record is a 403, not a 401:
    the identity is proven, the privilege is missing.
    """
    claims = verify_access_token(token, allowed_types=(SUBJECT_ADMIN, SUBJECT_OFFICE))
    if claims.subject_type == SUBJECT_ADMIN:
        return await _active_admin(claims.subject_id)

    office_user = await _active_office_user(claims.subject_id)
    admin_doc = await IdentityService().admin_for_email(office_user.get("email", ""))
    if not admin_doc or not admin_doc.get("isActive", True):
        logger.warning("Office user %s has no active admin record", office_user.get("email"))
        raise AuthorizationError("Access denied. Admin privileges required.")
    return admin_doc


async def require_super_admin(admin: Dict[str, Any] = Depends(get_current_admin)) -> Dict[str, Any]:
    if not is_super_admin(admin):
        raise AuthorizationError("Access denied. Super admin role required.")
    return admin


_CAPABILITY_LABELS = {
    Capability.USER_MANAGEMENT: "User management",
    Capability.PINCODE_MANAGEMENT: "Pincode management",
    Capability.ADDRESS_FORMS: "Address forms",
}


def _denied(capability: Capability) -> AuthorizationError:
    label = _CAPABILITY_LABELS.get(capability, capability.value)
    return AuthorizationError(f"Access denied. {label} permission required.")


def require_permission(capability: Capability, resolver: Callable = get_current_admin) -> Callable:
    """Dependency factory: resolve the admin, then check one capability."""

    async def checker(admin: Dict[str, Any] = Depends(resolver)) -> Dict[str, Any]:
        if not can_access(admin, capability):
            raise _denied(capability)
        return admin

    return checker


async def require_permission_assigner(
    admin: Dict[str, Any] = Depends(get_admin_or_office_admin),
) -> Dict[str, Any]:
    if not can_access(admin, Capability.USER_MANAGEMENT) or not can_assign(admin):
        raise AuthorizationError("Access denied. User management and permission assignment required.")
    return admin


def require_office_permission(capability: Capability) -> Callable:
    """Office-only routes: the office user's own permission map decides."""

    async def checker(user: Dict[str, Any] = Depends(get_current_office_user)) -> Dict[str, Any]:
        if not can_office_access(user, capability):
            raise _denied(capability)
        return user

    return checker
