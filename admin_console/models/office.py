# admin_console/models/office.py
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from admin_console.models.admin import PermissionFlags


class OfficeUserUpdate(BaseModel):
    # email is the join key with admins and is not editable here
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    department: Optional[str] = None
    phone: Optional[str] = None


class OfficePermissionsUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    permissions: PermissionFlags


class UserStatusIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    isActive: StrictBool


class OfficeUserSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    role: Optional[str] = None
    department: Optional[str] = None
    permissions: Dict[str, bool]


class OfficeLoginOut(BaseModel):
    success: bool = True
    message: str = "Login successful"
    token: str
    user: OfficeUserSummary
