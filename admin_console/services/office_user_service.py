# admin_console/services/office_user_service.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from pymongo import DESCENDING, ReturnDocument

from admin_console.core.errors import NotFound, ValidationFailed
from admin_console.core.permissions import normalize_office_permissions
from admin_console.db.mongo import NO_PASSWORD, OFFICE_USERS, get_db
from admin_console.models.utils import or_search, str_to_objid, utcnow
from admin_console.services.identity_service import IdentityService

logger = logging.getLogger(__name__)


class OfficeUserService:
    def __init__(self) -> None:
        self.db = get_db()
        self.office_users = self.db[OFFICE_USERS]
        self.identity = IdentityService()

    async def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        return await self.office_users.find_one({"_id": str_to_objid(user_id, "user ID")}, NO_PASSWORD)

    async def list_users(self, search: str, skip: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        """
        Office users who also hold an admin record are listed under admin
        management instead, so their emails are filtered out here.
        """
        query = or_search(search, ["name", "email", "department"])
        query["email"] = {"$nin": await self.identity.admin_email_patterns()}

        users = (
            await self.office_users.find(query, NO_PASSWORD)
            .sort("createdAt", DESCENDING)
            .skip(skip)
            .limit(limit)
            .to_list(length=None)
        )
        total = await self.office_users.count_documents(query)
        return users, total

    async def _update(self, user_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        changes = dict(changes, updatedAt=utcnow())
        updated = await self.office_users.find_one_and_update(
            {"_id": str_to_objid(user_id, "user ID")},
            {"$set": changes},
            projection=NO_PASSWORD,
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise NotFound("User not found.")
        return updated

    async def update_user(self, user_id: str, changes: Dict[str, Any], actor: Dict[str, Any]) -> Dict[str, Any]:
        if not changes:
            raise ValidationFailed("No fields to update.")
        user = await self._update(user_id, changes)
        logger.info("User updated by admin %s: %s (%s)", actor.get("name"), user.get("name"), user.get("email"))
        return user

    async def update_permissions(
        self, user_id: str, requested: Dict[str, Any], actor: Dict[str, Any]
    ) -> Dict[str, Any]:
        user = await self._update(user_id, {"permissions": normalize_office_permissions(requested)})
        logger.info(
            "User permissions updated by admin %s: %s (%s)", actor.get("name"), user.get("name"), user.get("email")
        )
        return user

    async def set_status(self, user_id: str, is_active: bool, actor: Dict[str, Any]) -> Dict[str, Any]:
        user = await self._update(user_id, {"isActive": is_active})
        logger.info(
            "User status updated by admin %s: %s (%s) - %s",
            actor.get("name"),
            user.get("name"),
            user.get("email"),
            "Activated" if is_active else "Deactivated",
        )
        return user

    async def delete_user(self, user_id: str, actor: Dict[str, Any]) -> Dict[str, Any]:
        deleted = await self.office_users.find_one_and_delete(
            {"_id": str_to_objid(user_id, "user ID")}, projection=NO_PASSWORD
        )
        if not deleted:
            raise NotFound("User not found.")
        logger.info("Office user deleted by admin %s: %s (%s)", actor.get("name"), deleted.get("name"), deleted.get("email"))
        return deleted
