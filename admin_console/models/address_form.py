# admin_console/models/address_form.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr


class AddressFormUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    senderName: Optional[str] = None
    senderEmail: Optional[EmailStr] = None
    senderPhone: Optional[str] = None
    senderPincode: Optional[str] = None
    senderState: Optional[str] = None
    senderCity: Optional[str] = None
    senderDistrict: Optional[str] = None
    senderArea: Optional[str] = None
    senderAddressLine1: Optional[str] = None
    senderAddressLine2: Optional[str] = None
    senderLandmark: Optional[str] = None

    receiverName: Optional[str] = None
    receiverEmail: Optional[EmailStr] = None
    receiverPhone: Optional[str] = None
    receiverPincode: Optional[str] = None
    receiverState: Optional[str] = None
    receiverCity: Optional[str] = None
    receiverDistrict: Optional[str] = None
    receiverArea: Optional[str] = None
    receiverAddressLine1: Optional[str] = None
    receiverAddressLine2: Optional[str] = None
    receiverLandmark: Optional[str] = None

    formCompleted: Optional[bool] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)
