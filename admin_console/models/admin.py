# admin_console/models/admin.py
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class PermissionFlags(BaseModel):
    # every capability name is accepted; baseline ones are overridden on write
    model_config = ConfigDict(extra="forbid")

    dashboard: Optional[bool] = None
    userManagement: Optional[bool] = None
    pincodeManagement: Optional[bool] = None
    addressForms: Optional[bool] = None
    reports: Optional[bool] = None
    settings: Optional[bool] = None

    def requested(self) -> Dict[str, bool]:
        return self.model_dump(exclude_none=True)


class AssignAdminIn(BaseModel):
    """Promote an existing office user to admin."""

    model_config = ConfigDict(extra="forbid")

    userId: str = Field(..., min_length=1)
    permissions: Optional[PermissionFlags] = None
    canAssignPermissions: bool = False


class AdminPermissionsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    permissions: PermissionFlags
    canAssignPermissions: Optional[bool] = None


class AdminSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    role: str
    lastLogin: Optional[str] = None
    permissions: Dict[str, bool]
    canAssignPermissions: bool = False


class LoginOut(BaseModel):
    success: bool = True
    message: str = "Login successful"
    token: str
    admin: AdminSummary
