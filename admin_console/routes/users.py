# admin_console/routes/users.py
from typing import Any, Dict

from fastapi import APIRouter, Depends

from admin_console.core.deps import get_admin_or_office_admin, require_permission, require_permission_assigner
from admin_console.core.errors import NotFound
from admin_console.core.permissions import Capability
from admin_console.models.common import DataOut, DeletedOut, MessageOut, PageOut, PageParams
from admin_console.models.office import OfficePermissionsUpdate, OfficeUserUpdate, UserStatusIn
from admin_console.models.utils import build_pagination, serialize_many, serialize_mongo_doc
from admin_console.services.office_user_service import OfficeUserService

router = APIRouter(prefix="/api/admin/users", tags=["user-management"])

# admins, or office users who also hold an admin record
can_manage_users = require_permission(Capability.USER_MANAGEMENT, resolver=get_admin_or_office_admin)


@router.get("", response_model=PageOut)
async def list_office_users(params: PageParams = Depends(), admin: Dict[str, Any] = Depends(can_manage_users)):
    users, total = await OfficeUserService().list_users(params.search, params.skip, params.limit)
    return {
        "success": True,
        "data": serialize_many(users),
        "pagination": build_pagination(params.page, params.limit, total),
        "search": params.search,
    }


@router.get("/{user_id}", response_model=DataOut)
async def get_office_user(user_id: str, admin: Dict[str, Any] = Depends(can_manage_users)):
    user = await OfficeUserService().get_user(user_id)
    if not user:
        raise NotFound("User not found.")
    return {"success": True, "data": serialize_mongo_doc(user)}


@router.put("/{user_id}", response_model=MessageOut)
async def update_office_user(
    user_id: str,
    payload: OfficeUserUpdate,
    admin: Dict[str, Any] = Depends(can_manage_users),
):
    user = await OfficeUserService().update_user(user_id, payload.model_dump(exclude_none=True), admin)
    return {"success": True, "message": "User updated successfully.", "data": serialize_mongo_doc(user)}


@router.put("/{user_id}/permissions", response_model=MessageOut)
async def update_office_user_permissions(
    user_id: str,
    payload: OfficePermissionsUpdate,
    admin: Dict[str, Any] = Depends(require_permission_assigner),
):
    user = await OfficeUserService().update_permissions(user_id, payload.permissions.requested(), admin)
    return {"success": True, "message": "User permissions updated successfully.", "data": serialize_mongo_doc(user)}


@router.put("/{user_id}/status", response_model=MessageOut)
async def update_office_user_status(
    user_id: str,
    payload: UserStatusIn,
    admin: Dict[str, Any] = Depends(can_manage_users),
):
    user = await OfficeUserService().set_status(user_id, payload.isActive, admin)
    state = "activated" if payload.isActive else "deactivated"
    return {"success": True, "message": f"User {state} successfully.", "data": serialize_mongo_doc(user)}


@router.delete("/{user_id}", response_model=DeletedOut)
async def delete_office_user(user_id: str, admin: Dict[str, Any] = Depends(can_manage_users)):
    deleted = await OfficeUserService().delete_user(user_id, admin)
    return {
        "success": True,
        "message": "User deleted successfully.",
        "deletedData": {"id": str(deleted["_id"]), "name": deleted.get("name"), "email": deleted.get("email")},
    }
