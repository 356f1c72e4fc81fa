# admin_console/routes/admins.py
from typing import Any, Dict

from fastapi import APIRouter, Depends

from admin_console.core.deps import require_super_admin
from admin_console.core.errors import NotFound
from admin_console.models.admin import AdminPermissionsUpdate, AssignAdminIn
from admin_console.models.common import DataOut, DeletedOut, MessageOut, PageOut, PageParams
from admin_console.models.utils import build_pagination, serialize_many, serialize_mongo_doc
from admin_console.services.admin_service import AdminService

router = APIRouter(prefix="/api/admin/admins", tags=["admin-management"])


@router.get("", response_model=PageOut)
async def list_admins(params: PageParams = Depends(), admin: Dict[str, Any] = Depends(require_super_admin)):
    admins, total = await AdminService().list_admins(params.search, params.skip, params.limit)
    return {
        "success": True,
        "data": serialize_many(admins),
        "pagination": build_pagination(params.page, params.limit, total),
        "search": params.search,
    }


@router.get("/{admin_id}", response_model=DataOut)
async def get_admin(admin_id: str, admin: Dict[str, Any] = Depends(require_super_admin)):
    found = await AdminService().get_admin(admin_id)
    if not found:
        raise NotFound("Admin not found.")
    return {"success": True, "data": serialize_mongo_doc(found)}


@router.post("", response_model=MessageOut)
async def assign_admin_role(payload: AssignAdminIn, admin: Dict[str, Any] = Depends(require_super_admin)):
    requested = payload.permissions.requested() if payload.permissions else None
    created = await AdminService().assign_admin_role(
        user_id=payload.userId,
        requested_permissions=requested,
        can_assign_permissions=payload.canAssignPermissions,
        assigned_by=admin,
    )
    return {"success": True, "message": "Admin role assigned successfully.", "data": serialize_mongo_doc(created)}


@router.put("/{admin_id}/permissions", response_model=MessageOut)
async def update_admin_permissions(
    admin_id: str,
    payload: AdminPermissionsUpdate,
    admin: Dict[str, Any] = Depends(require_super_admin),
):
    updated = await AdminService().update_permissions(
        admin_id,
        requested_permissions=payload.permissions.requested(),
        can_assign_permissions=payload.canAssignPermissions,
        updated_by=admin,
    )
    return {"success": True, "message": "Admin permissions updated successfully.", "data": serialize_mongo_doc(updated)}


@router.delete("/{admin_id}", response_model=DeletedOut)
async def remove_admin_role(admin_id: str, admin: Dict[str, Any] = Depends(require_super_admin)):
    removed = await AdminService().remove_admin_role(admin_id, removed_by=admin)
    return {
        "success": True,
        "message": "Admin role removed successfully.",
        "deletedData": {"id": str(removed["_id"]), "name": removed.get("name"), "email": removed.get("email")},
    }
