# admin_console/models/utils.py
import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId

from admin_console.core.errors import InvalidIdentifier


def utcnow() -> datetime:
    # naive UTC, which is what pymongo hands back on reads
    return datetime.now(timezone.utc).replace(tzinfo=None)


def str_to_objid(s: str, label: str = "ID") -> ObjectId:
    if not ObjectId.is_valid(s):
        raise InvalidIdentifier(f"Invalid {label} format.")
    return ObjectId(s)


def serialize_mongo_doc(doc: Dict) -> Dict:
    """
    Convert a MongoDB document to a JSON-serializable dict:
    - Convert ObjectId values to strings
    - Convert datetimes to ISO strings
    """
    out: Dict = {}
    for k, v in doc.items():
        if isinstance(v, ObjectId):
            out[k] = str(v)
        elif isinstance(v, datetime):
            out[k] = v.isoformat()
        elif isinstance(v, dict):
            out[k] = serialize_mongo_doc(v)
        elif isinstance(v, list):
            out[k] = [serialize_mongo_doc(i) if isinstance(i, dict) else (str(i) if isinstance(i, ObjectId) else i) for i in v]
        else:
            out[k] = v
    return out


def serialize_many(docs: List[Dict]) -> List[Dict]:
    return [serialize_mongo_doc(d) for d in docs]


def search_regex(term: str) -> Dict[str, Any]:
    """Case-insensitive substring match; the term is escaped, not a pattern."""
    return {"$regex": re.escape(term), "$options": "i"}


def or_search(term: Optional[str], fields: List[str]) -> Dict[str, Any]:
    if not term:
        return {}
    rx = search_regex(term)
    return {"$or": [{f: rx} for f in fields]}


def build_pagination(page: int, limit: int, total_count: int) -> Dict[str, Any]:
    return {
        "currentPage": page,
        "totalPages": math.ceil(total_count / limit) if limit else 0,
        "totalCount": total_count,
        "hasNext": page * limit < total_count,
        "hasPrev": page > 1,
        "limit": limit,
    }
