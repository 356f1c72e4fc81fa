# admin_console/models/pincode.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PincodeIn(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    pincode: int = Field(..., gt=0)
    areaname: str = Field(..., min_length=1)
    cityname: str = Field(..., min_length=1)
    districtname: Optional[str] = None
    statename: str = Field(..., min_length=1)
    serviceable: bool = False

    @field_validator("districtname")
    @classmethod
    def blank_district_is_missing(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class PincodeUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    pincode: Optional[int] = Field(None, gt=0)
    areaname: Optional[str] = Field(None, min_length=1)
    cityname: Optional[str] = Field(None, min_length=1)
    districtname: Optional[str] = Field(None, min_length=1)
    statename: Optional[str] = Field(None, min_length=1)
    serviceable: Optional[bool] = None
