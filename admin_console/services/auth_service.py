# admin_console/services/auth_service.py
import logging
from typing import Any, Dict

from pymongo import ReturnDocument

from admin_console.core.config import settings
from admin_console.core.errors import AccountInactive, InvalidCredentials
from admin_console.core.permissions import ROLE_SUPER_ADMIN, full_admin_permissions
from admin_console.core.security import (
    SUBJECT_ADMIN,
    SUBJECT_OFFICE,
    create_access_token,
    hash_password,
    verify_password,
)
from admin_console.db.mongo import ADMINS, OFFICE_USERS, get_db
from admin_console.models.utils import utcnow
from admin_console.services.identity_service import normalize_email

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self):
        self.db = get_db()
        # collections
        self.admins = self.db[ADMINS]
        self.office_users = self.db[OFFICE_USERS]

    @staticmethod
    def _check_password(doc: Dict[str, Any], password: str) -> bool:
        hashed = doc.get("password") or doc.get("password_hash")  # compatibility if different field
        if not hashed:
            return False
        return verify_password(password, hashed)

    async def authenticate_admin(self, email: str, password: str) -> Dict[str, Any]:
        """
        Verify admin credentials and record the login.
        Returns the updated admin document (without password).
        """
        email = normalize_email(email)
        logger.info("Admin login attempt: %s", email)

        admin = await self.admins.find_one({"email": email})
        if not admin:
            logger.warning("Admin login failed, unknown email: %s", email)
            raise InvalidCredentials()
        if not admin.get("isActive", True):
            logger.warning("Admin login refused, account inactive: %s", email)
            raise AccountInactive("Admin account is deactivated.")
        if not self._check_password(admin, password):
            logger.warning("Admin login failed, bad password: %s", email)
            raise InvalidCredentials()

        updated = await self.admins.find_one_and_update(
            {"_id": admin["_id"]},
            {"$set": {"lastLogin": utcnow()}, "$inc": {"loginCount": 1}},
            projection={"password": 0},
            return_document=ReturnDocument.AFTER,
        )
        logger.info("Admin login successful: %s (%s)", updated.get("name"), email)
        return updated

    async def authenticate_office_user(self, email: str, password: str) -> Dict[str, Any]:
        email = normalize_email(email)
        logger.info("Office login attempt: %s", email)

        user = await self.office_users.find_one({"email": email})
        if not user or not self._check_password(user, password):
            logger.warning("Office login failed: %s", email)
            raise InvalidCredentials()
        if not user.get("isActive", True):
            logger.warning("Office login refused, account inactive: %s", email)
            raise AccountInactive("User account is deactivated.")

        user.pop("password", None)
        user.pop("password_hash", None)
        return user

    @staticmethod
    def create_token_for_admin(admin_doc: Dict[str, Any]) -> str:
        return create_access_token(subject=str(admin_doc["_id"]), subject_type=SUBJECT_ADMIN)

    @staticmethod
    def create_token_for_office_user(user_doc: Dict[str, Any]) -> str:
        return create_access_token(subject=str(user_doc["_id"]), subject_type=SUBJECT_OFFICE)

    async def seed_default_admin(self) -> bool:
        """
        Create the first super admin when the collection is empty and a
        default password is configured. Returns True when one was created.
        """
        if not settings.DEFAULT_ADMIN_PASSWORD:
            return False
        if await self.admins.count_documents({}) > 0:
            return False

        now = utcnow()
        await self.admins.insert_one(
            {
                "email": normalize_email(settings.DEFAULT_ADMIN_EMAIL),
                "password": hash_password(settings.DEFAULT_ADMIN_PASSWORD),
                "name": settings.DEFAULT_ADMIN_NAME,
                "role": ROLE_SUPER_ADMIN,
                "permissions": full_admin_permissions(),
                "canAssignPermissions": True,
                "assignedBy": None,
                "isActive": True,
                "lastLogin": None,
                "loginCount": 0,
                "createdAt": now,
                "updatedAt": now,
            }
        )
        logger.info("Default super admin created: %s", settings.DEFAULT_ADMIN_EMAIL)
        return True
