# admin_console/services/admin_service.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from pymongo import DESCENDING, ReturnDocument

from admin_console.core.errors import AuthorizationError, Conflict, NotFound
from admin_console.core.permissions import ROLE_ADMIN, is_super_admin, normalize_admin_permissions
from admin_console.db.mongo import ADMINS, NO_PASSWORD, OFFICE_USERS, get_db
from admin_console.models.utils import or_search, str_to_objid, utcnow
from admin_console.services.identity_service import IdentityService, normalize_email

logger = logging.getLogger(__name__)


class AdminService:
    """
    Admin records are only ever created by promoting an office user, changed by
    permission updates, and removed by a hard delete. Super admins are off-limits
    to all three.
    """

    def __init__(self) -> None:
        self.db = get_db()
        self.admins = self.db[ADMINS]
        self.office_users = self.db[OFFICE_USERS]
        self.identity = IdentityService()

    async def get_admin(self, admin_id: str) -> Optional[Dict[str, Any]]:
        return await self.admins.find_one({"_id": str_to_objid(admin_id, "admin ID")}, NO_PASSWORD)

    async def list_admins(self, search: str, skip: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        query = or_search(search, ["name", "email"])
        admins = (
            await self.admins.find(query, NO_PASSWORD)
            .sort("createdAt", DESCENDING)
            .skip(skip)
            .limit(limit)
            .to_list(length=None)
        )
        total = await self.admins.count_documents(query)
        await self._expand_assigned_by(admins)
        return admins, total

    async def _expand_assigned_by(self, admins: List[Dict[str, Any]]) -> None:
        """Replace assignedBy ids with {_id, name, email} of the assigning admin."""
        ids = list({a["assignedBy"] for a in admins if a.get("assignedBy")})
        if not ids:
            return
        assigners = await self.admins.find({"_id": {"$in": ids}}, {"name": 1, "email": 1}).to_list(length=None)
        by_id = {a["_id"]: a for a in assigners}
        for admin in admins:
            ref = admin.get("assignedBy")
            if ref:
                admin["assignedBy"] = by_id.get(ref)

    async def assign_admin_role(
        self,
        user_id: str,
        requested_permissions: Optional[Dict[str, Any]],
        can_assign_permissions: bool,
        assigned_by: Dict[str, Any],
    ) -> Dict[str, Any]:
        office_user = await self.office_users.find_one({"_id": str_to_objid(user_id, "user ID")})
        if not office_user:
            raise NotFound("Office user not found.")

        email = normalize_email(office_user["email"])
        if await self.identity.admin_for_email(email):
            raise Conflict("This user is already an admin.")

        now = utcnow()
        admin_doc = {
            "email": email,
            # same person, same credentials
            "password": office_user.get("password") or office_user.get("password_hash"),
            "name": office_user.get("name"),
            "role": ROLE_ADMIN,
            "permissions": normalize_admin_permissions(requested_permissions),
            "canAssignPermissions": can_assign_permissions is True,
            "assignedBy": assigned_by["_id"],
            "isActive": True,
            "lastLogin": None,
            "loginCount": 0,
            "createdAt": now,
            "updatedAt": now,
        }
        res = await self.admins.insert_one(admin_doc)
        created = await self.admins.find_one({"_id": res.inserted_id}, NO_PASSWORD)

        logger.info(
            "Admin role assigned by super admin %s: %s (%s)",
            assigned_by.get("name"),
            created.get("name"),
            created.get("email"),
        )
        return created

    async def _load_mutable_target(self, admin_id: str, action: str) -> Dict[str, Any]:
        target = await self.admins.find_one({"_id": str_to_objid(admin_id, "admin ID")}, NO_PASSWORD)
        if not target:
            raise NotFound("Admin not found.")
        if is_super_admin(target):
            raise AuthorizationError(f"Cannot {action} a super admin.")
        return target

    async def update_permissions(
        self,
        admin_id: str,
        requested_permissions: Dict[str, Any],
        can_assign_permissions: Optional[bool],
        updated_by: Dict[str, Any],
    ) -> Dict[str, Any]:
        target = await self._load_mutable_target(admin_id, "modify permissions of")

        update: Dict[str, Any] = {
            "permissions": normalize_admin_permissions(requested_permissions),
            "updatedAt": utcnow(),
        }
        if isinstance(can_assign_permissions, bool):
            update["canAssignPermissions"] = can_assign_permissions

        # last write wins; concurrent edits are not reconciled
        updated = await self.admins.find_one_and_update(
            {"_id": target["_id"]},
            {"$set": update},
            projection=NO_PASSWORD,
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise NotFound("Admin not found.")

        logger.info(
            "Admin permissions updated by super admin %s: %s (%s)",
            updated_by.get("name"),
            updated.get("name"),
            updated.get("email"),
        )
        return updated

    async def remove_admin_role(self, admin_id: str, removed_by: Dict[str, Any]) -> Dict[str, Any]:
        target = await self._load_mutable_target(admin_id, "remove")
        # the office user with the same email is left untouched
        await self.admins.delete_one({"_id": target["_id"]})

        logger.info(
            "Admin role removed by super admin %s: %s (%s)",
            removed_by.get("name"),
            target.get("name"),
            target.get("email"),
        )
        return target
