# admin_console/routes/office.py
from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from admin_console.core.deps import get_current_office_user, require_office_permission
from admin_console.core.permissions import Capability, default_office_permissions
from admin_console.models.admin import LoginIn
from admin_console.models.common import DeletedOut, MessageOut, PageOut, PageParams
from admin_console.models.office import OfficeLoginOut, OfficeUserSummary
from admin_console.models.pincode import PincodeIn, PincodeUpdate
from admin_console.models.utils import serialize_mongo_doc
from admin_console.routes.pincodes import (
    PincodeFilters,
    pincode_add,
    pincode_csv,
    pincode_delete,
    pincode_page,
    pincode_update,
)
from admin_console.services.auth_service import AuthService

router = APIRouter(prefix="/api/office", tags=["office"])

office_can_manage_pincodes = require_office_permission(Capability.PINCODE_MANAGEMENT)


@router.post("/login", response_model=OfficeLoginOut)
async def office_login(payload: LoginIn):
    auth = AuthService()
    user = await auth.authenticate_office_user(payload.email, payload.password)
    token = auth.create_token_for_office_user(user)
    doc = serialize_mongo_doc(user)
    return OfficeLoginOut(
        token=token,
        user=OfficeUserSummary(
            id=doc["_id"],
            name=doc.get("name"),
            email=doc["email"],
            role=doc.get("role"),
            department=doc.get("department"),
            permissions=doc.get("permissions") or default_office_permissions(),
        ),
    )


@router.get("/profile")
async def office_profile(user: Dict[str, Any] = Depends(get_current_office_user)):
    return {"success": True, "user": serialize_mongo_doc(user)}


@router.get("/pincodes", response_model=PageOut)
async def office_list_pincodes(
    params: PageParams = Depends(),
    filters: PincodeFilters = Depends(),
    user: Dict[str, Any] = Depends(office_can_manage_pincodes),
):
    return await pincode_page(params, filters)


@router.get("/pincodes/export")
async def office_export_pincodes(
    search: str = Query(""),
    filters: PincodeFilters = Depends(),
    user: Dict[str, Any] = Depends(office_can_manage_pincodes),
):
    return await pincode_csv(search, filters)


@router.post("/pincodes", response_model=MessageOut)
async def office_add_pincode(payload: PincodeIn, user: Dict[str, Any] = Depends(office_can_manage_pincodes)):
    return await pincode_add(payload, user)


@router.put("/pincodes/{pincode_id}", response_model=MessageOut)
async def office_update_pincode(
    pincode_id: str,
    payload: PincodeUpdate,
    user: Dict[str, Any] = Depends(office_can_manage_pincodes),
):
    return await pincode_update(pincode_id, payload, user)


@router.delete("/pincodes/{pincode_id}", response_model=DeletedOut)
async def office_delete_pincode(pincode_id: str, user: Dict[str, Any] = Depends(office_can_manage_pincodes)):
    return await pincode_delete(pincode_id, user)
