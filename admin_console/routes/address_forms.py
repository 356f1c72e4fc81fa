# admin_console/routes/address_forms.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from admin_console.core.deps import require_permission
from admin_console.core.permissions import Capability
from admin_console.models.address_form import AddressFormUpdate
from admin_console.models.common import DataOut, DeletedOut, MessageOut, PageOut, PageParams
from admin_console.models.utils import build_pagination, serialize_many, serialize_mongo_doc
from admin_console.services.address_form_service import AddressFormService, build_form_query

router = APIRouter(prefix="/api/admin/addressforms", tags=["address-forms"])

can_manage_forms = require_permission(Capability.ADDRESS_FORMS)


@router.get("", response_model=PageOut)
async def list_address_forms(
    params: PageParams = Depends(),
    completed: Optional[bool] = Query(None, description="filter on formCompleted"),
    state: Optional[str] = Query(None, description="sender state, case-insensitive"),
    admin: Dict[str, Any] = Depends(can_manage_forms),
):
    query = build_form_query(params.search, completed, state)
    forms, total = await AddressFormService().list_forms(query, params.skip, params.limit)
    return {
        "success": True,
        "data": serialize_many(forms),
        "pagination": build_pagination(params.page, params.limit, total),
        "search": params.search,
    }


@router.get("/{form_id}", response_model=DataOut)
async def get_address_form(form_id: str, admin: Dict[str, Any] = Depends(can_manage_forms)):
    form = await AddressFormService().get_form(form_id)
    return {"success": True, "data": serialize_mongo_doc(form)}


@router.put("/{form_id}", response_model=MessageOut)
async def update_address_form(
    form_id: str,
    payload: AddressFormUpdate,
    admin: Dict[str, Any] = Depends(can_manage_forms),
):
    updated = await AddressFormService().update_form(form_id, payload.changes(), admin)
    return {"success": True, "message": "Address form updated successfully.", "data": serialize_mongo_doc(updated)}


@router.delete("/{form_id}", response_model=DeletedOut)
async def delete_address_form(form_id: str, admin: Dict[str, Any] = Depends(can_manage_forms)):
    deleted = await AddressFormService().delete_form(form_id, admin)
    return {
        "success": True,
        "message": "Address form deleted successfully.",
        "deletedData": {
            "id": str(deleted["_id"]),
            "senderName": deleted.get("senderName"),
            "senderEmail": deleted.get("senderEmail"),
        },
    }
