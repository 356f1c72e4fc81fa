# admin_console/services/pincode_service.py
import csv
import io
import logging
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo import ASCENDING, ReturnDocument

from admin_console.core.errors import Conflict, NotFound, ValidationFailed
from admin_console.db.mongo import PINCODES, get_db
from admin_console.models.utils import or_search, search_regex, str_to_objid, utcnow

logger = logging.getLogger(__name__)

CSV_HEADER = ["Pincode", "Area", "City", "District", "State", "Serviceable"]
TEXT_FIELDS = ["areaname", "cityname", "statename", "districtname"]


def build_pincode_query(search: str = "", state: Optional[str] = None, city: Optional[str] = None) -> Dict[str, Any]:
    query: Dict[str, Any] = or_search(search, TEXT_FIELDS)
    if search and search.isdigit():
        query["$or"].append({"pincode": int(search)})
    if state:
        query["statename"] = search_regex(state)
    if city:
        query["cityname"] = search_regex(city)
    return query


class PincodeService:
    def __init__(self) -> None:
        self.db = get_db()
        self.pincodes = self.db[PINCODES]

    async def list_pincodes(self, query: Dict[str, Any], skip: int, limit: int) -> Tuple[List[Dict[str, Any]], int]:
        docs = (
            await self.pincodes.find(query)
            .sort("pincode", ASCENDING)
            .skip(skip)
            .limit(limit)
            .to_list(length=None)
        )
        total = await self.pincodes.count_documents(query)
        return docs, total

    async def export_csv(self, query: Dict[str, Any]) -> str:
        docs = await self.pincodes.find(query).sort("pincode", ASCENDING).to_list(length=None)
        buf = io.StringIO()
        writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for d in docs:
            writer.writerow(
                [
                    d.get("pincode", ""),
                    d.get("areaname", ""),
                    d.get("cityname", ""),
                    d.get("districtname", ""),
                    d.get("statename", ""),
                    "Yes" if d.get("serviceable") else "No",
                ]
            )
        return buf.getvalue()

    async def _ensure_unique_triple(
        self, pincode: int, areaname: str, cityname: str, exclude_id: Optional[ObjectId] = None
    ) -> None:
        query: Dict[str, Any] = {"pincode": pincode, "areaname": areaname, "cityname": cityname}
        if exclude_id is not None:
            query["_id"] = {"$ne": exclude_id}
        if await self.pincodes.find_one(query):
            raise Conflict("This pincode area combination already exists.")

    async def create_pincode(self, data: Dict[str, Any], actor: Dict[str, Any]) -> Dict[str, Any]:
        await self._ensure_unique_triple(data["pincode"], data["areaname"], data["cityname"])

        now = utcnow()
        doc = {
            "pincode": data["pincode"],
            "areaname": data["areaname"],
            "cityname": data["cityname"],
            "districtname": data.get("districtname") or data["cityname"],
            "statename": data["statename"],
            "serviceable": data.get("serviceable") is True,
            "createdAt": now,
            "updatedAt": now,
        }
        res = await self.pincodes.insert_one(doc)
        doc["_id"] = res.inserted_id
        logger.info("Pincode added by %s: %s - %s", actor.get("name"), doc["pincode"], doc["areaname"])
        return doc

    async def update_pincode(self, pincode_id: str, changes: Dict[str, Any], actor: Dict[str, Any]) -> Dict[str, Any]:
        if not changes:
            raise ValidationFailed("No fields to update.")
        oid = str_to_objid(pincode_id, "pincode ID")
        current = await self.pincodes.find_one({"_id": oid})
        if not current:
            raise NotFound("Pincode not found.")

        if {"pincode", "areaname", "cityname"} & changes.keys():
            merged = {**current, **changes}
            await self._ensure_unique_triple(merged["pincode"], merged["areaname"], merged["cityname"], exclude_id=oid)

        updated = await self.pincodes.find_one_and_update(
            {"_id": oid},
            {"$set": dict(changes, updatedAt=utcnow())},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise NotFound("Pincode not found.")
        logger.info("Pincode updated by %s: %s - %s", actor.get("name"), updated["pincode"], updated["areaname"])
        return updated

    async def delete_pincode(self, pincode_id: str, actor: Dict[str, Any]) -> Dict[str, Any]:
        deleted = await self.pincodes.find_one_and_delete({"_id": str_to_objid(pincode_id, "pincode ID")})
        if not deleted:
            raise NotFound("Pincode not found.")
        logger.info("Pincode deleted by %s: %s - %s", actor.get("name"), deleted["pincode"], deleted["areaname"])
        return deleted
