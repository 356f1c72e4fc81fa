# admin_console/routes/auth.py
from typing import Any, Dict

from fastapi import APIRouter, Depends

from admin_console.core.deps import get_current_admin
from admin_console.models.admin import AdminSummary, LoginIn, LoginOut
from admin_console.models.common import DataOut
from admin_console.models.utils import serialize_mongo_doc
from admin_console.services.auth_service import AuthService
from admin_console.services.stats_service import StatsService

router = APIRouter(prefix="/api/admin", tags=["auth"])


def admin_summary(admin_doc: Dict[str, Any]) -> AdminSummary:
    doc = serialize_mongo_doc(admin_doc)
    return AdminSummary(
        id=doc["_id"],
        name=doc.get("name"),
        email=doc["email"],
        role=doc.get("role", "admin"),
        lastLogin=doc.get("lastLogin"),
        permissions=doc.get("permissions") or {},
        canAssignPermissions=doc.get("canAssignPermissions") is True,
    )


@router.post("/login", response_model=LoginOut)
async def admin_login(payload: LoginIn):
    auth = AuthService()
    # raises InvalidCredentials / AccountInactive without revealing which part failed
    admin_doc = await auth.authenticate_admin(payload.email, payload.password)
    token = auth.create_token_for_admin(admin_doc)
    return LoginOut(token=token, admin=admin_summary(admin_doc))


@router.get("/profile")
async def admin_profile(admin: Dict[str, Any] = Depends(get_current_admin)):
    return {"success": True, "admin": serialize_mongo_doc(admin)}


@router.get("/stats", response_model=DataOut)
async def admin_stats(admin: Dict[str, Any] = Depends(get_current_admin)):
    stats = await StatsService().dashboard()
    return {"success": True, "data": serialize_mongo_doc(stats)}
