# admin_console/services/address_form_service.py
import logging
from typing import Any, Dict, List, Optional, Tuple

from pymongo import DESCENDING, ReturnDocument

from admin_console.core.errors import NotFound, ValidationFailed
from admin_console.db.mongo import ADDRESS_FORMS, get_db
from admin_console.models.utils import or_search, search_regex, str_to_objid, utcnow

logger = logging.getLogger(__name__)

SEARCH_FIELDS = [
    "senderName",
    "senderEmail",
    "senderPhone",
    "senderPincode",
    "receiverName",
    "receiverEmail",
    "receiverPhone",
    "receiverPincode",
]


def build_form_query(search: str = "", completed: Optional[bool] = None, state: Optional[str] = None) -> Dict[str, Any]:
    query = or_search(search, SEARCH_FIELDS)
    if completed is not None:
        query["formCompleted"] = completed
    if state:
        query["senderState"] = search_regex(state)
    return query


class AddressFormService:
    def __init__(self) -> None:
        self.db = get_db()
        self.forms = self.db[ADDRESS_FORMS]

    async def list_forms(self, query: Dict[str, Any], skip: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        forms = (
            await self.forms.find(query)
            .sort("createdAt", DESCENDING)
            .skip(skip)
            .limit(limit)
            .to_list(length=None)
        )
        total = await self.forms.count_documents(query)
        return forms, total

    async def get_form(self, form_id: str) -> Dict[str, Any]:
        form = await self.forms.find_one({"_id": str_to_objid(form_id, "form ID")})
        if not form:
            raise NotFound("Address form not found.")
        return form

    async def update_form(self, form_id: str, changes: Dict[str, Any], actor: Dict[str, Any]) -> Dict[str, Any]:
        if not changes:
            raise ValidationFailed("No fields to update.")
        updated = await self.forms.find_one_and_update(
            {"_id": str_to_objid(form_id, "form ID")},
            {"$set": dict(changes, updatedAt=utcnow())},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise NotFound("Address form not found.")
        logger.info("Address form updated by admin %s: %s", actor.get("name"), updated["_id"])
        return updated

    async def delete_form(self, form_id: str, actor: Dict[str, Any]) -> Dict[str, Any]:
        deleted = await self.forms.find_one_and_delete({"_id": str_to_objid(form_id, "form ID")})
        if not deleted:
            raise NotFound("Address form not found.")
        logger.info("Address form deleted by admin %s: %s", actor.get("name"), deleted["_id"])
        return deleted
