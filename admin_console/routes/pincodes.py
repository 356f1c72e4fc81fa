# admin_console/routes/pincodes.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from admin_console.core.deps import require_permission
from admin_console.core.permissions import Capability
from admin_console.models.common import DeletedOut, MessageOut, PageOut, PageParams
from admin_console.models.pincode import PincodeIn, PincodeUpdate
from admin_console.models.utils import build_pagination, serialize_many, serialize_mongo_doc
from admin_console.services.pincode_service import PincodeService, build_pincode_query

router = APIRouter(prefix="/api/admin/pincodes", tags=["pincodes"])

can_manage_pincodes = require_permission(Capability.PINCODE_MANAGEMENT)

EXPORT_FILENAME = "pincodes_export.csv"


class PincodeFilters:
    def __init__(
        self,
        state: Optional[str] = Query(None, description="state name, case-insensitive"),
        city: Optional[str] = Query(None, description="city name, case-insensitive"),
    ):
        self.state = state
        self.city = city


async def pincode_page(params: PageParams, filters: PincodeFilters) -> Dict[str, Any]:
    query = build_pincode_query(params.search, filters.state, filters.city)
    docs, total = await PincodeService().list_pincodes(query, params.skip, params.limit)
    return {
        "success": True,
        "data": serialize_many(docs),
        "pagination": build_pagination(params.page, params.limit, total),
        "search": params.search,
    }


async def pincode_csv(search: str, filters: PincodeFilters) -> Response:
    query = build_pincode_query(search.strip(), filters.state, filters.city)
    content = await PincodeService().export_csv(query)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


async def pincode_add(payload: PincodeIn, actor: Dict[str, Any]) -> Dict[str, Any]:
    created = await PincodeService().create_pincode(payload.model_dump(), actor)
    return {"success": True, "message": "Pincode added successfully.", "data": serialize_mongo_doc(created)}


async def pincode_update(pincode_id: str, payload: PincodeUpdate, actor: Dict[str, Any]) -> Dict[str, Any]:
    updated = await PincodeService().update_pincode(pincode_id, payload.model_dump(exclude_none=True), actor)
    return {"success": True, "message": "Pincode updated successfully.", "data": serialize_mongo_doc(updated)}


async def pincode_delete(pincode_id: str, actor: Dict[str, Any]) -> Dict[str, Any]:
    deleted = await PincodeService().delete_pincode(pincode_id, actor)
    return {
        "success": True,
        "message": "Pincode deleted successfully.",
        "deletedData": {
            "id": str(deleted["_id"]),
            "pincode": deleted.get("pincode"),
            "areaname": deleted.get("areaname"),
        },
    }


@router.get("", response_model=PageOut)
async def list_pincodes(
    params: PageParams = Depends(),
    filters: PincodeFilters = Depends(),
    admin: Dict[str, Any] = Depends(can_manage_pincodes),
):
    return await pincode_page(params, filters)


@router.get("/export")
async def export_pincodes(
    search: str = Query(""),
    filters: PincodeFilters = Depends(),
    admin: Dict[str, Any] = Depends(can_manage_pincodes),
):
    return await pincode_csv(search, filters)


@router.post("", response_model=MessageOut)
async def add_pincode(payload: PincodeIn, admin: Dict[str, Any] = Depends(can_manage_pincodes)):
    return await pincode_add(payload, admin)


@router.put("/{pincode_id}", response_model=MessageOut)
async def update_pincode(
    pincode_id: str,
    payload: PincodeUpdate,
    admin: Dict[str, Any] = Depends(can_manage_pincodes),
):
    return await pincode_update(pincode_id, payload, admin)


@router.delete("/{pincode_id}", response_model=DeletedOut)
async def delete_pincode(pincode_id: str, admin: Dict[str, Any] = Depends(can_manage_pincodes)):
    return await pincode_delete(pincode_id, admin)
