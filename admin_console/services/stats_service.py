# admin_console/services/stats_service.py
from datetime import timedelta
from typing import Any, Dict

from pymongo import DESCENDING

from admin_console.db.mongo import ADDRESS_FORMS, PINCODES, get_db
from admin_console.models.utils import utcnow

RECENT_FORM_FIELDS = {
    "senderName": 1,
    "senderEmail": 1,
    "receiverName": 1,
    "receiverEmail": 1,
    "createdAt": 1,
    "formCompleted": 1,
}


class StatsService:
    """Dashboard aggregates over address forms and pincodes."""

    def __init__(self) -> None:
        self.db = get_db()
        self.forms = self.db[ADDRESS_FORMS]
        self.pincodes = self.db[PINCODES]

    async def _daily_form_stats(self, days: int = 30) -> list:
        since = utcnow() - timedelta(days=days)
        pipeline = [
            {"$match": {"createdAt": {"$gte": since}}},
            {
                "$group": {
                    "_id": {
                        "date": {"$dateToString": {"format": "%Y-%m-%d", "date": "$createdAt"}},
                        "completed": "$formCompleted",
                    },
                    "count": {"$sum": 1},
                }
            },
            {"$sort": {"_id.date": 1, "_id.completed": 1}},
        ]
        return await self.forms.aggregate(pipeline).to_list(length=None)

    async def _top_sender_states(self, limit: int = 5) -> list:
        pipeline = [
            {"$match": {"senderState": {"$exists": True, "$ne": ""}}},
            {"$group": {"_id": "$senderState", "count": {"$sum": 1}}},
            {"$sort": {"count": -1, "_id": 1}},
            {"$limit": limit},
        ]
        return await self.forms.aggregate(pipeline).to_list(length=None)

    async def dashboard(self) -> Dict[str, Any]:
        total_forms = await self.forms.count_documents({})
        completed_forms = await self.forms.count_documents({"formCompleted": True})

        recent_forms = (
            await self.forms.find({}, RECENT_FORM_FIELDS).sort("createdAt", DESCENDING).limit(5).to_list(length=None)
        )

        total_pincodes = await self.pincodes.count_documents({})
        states = await self.pincodes.distinct("statename")
        cities = await self.pincodes.distinct("cityname")

        return {
            "forms": {
                "total": total_forms,
                "completed": completed_forms,
                "incomplete": total_forms - completed_forms,
                "completionRate": round(completed_forms / total_forms * 100) if total_forms else 0,
            },
            "pincodes": {
                "total": total_pincodes,
                "states": len(states),
                "cities": len(cities),
            },
            "recent": {
                "forms": recent_forms,
                "stats": await self._daily_form_stats(),
                "topStates": await self._top_sender_states(),
            },
        }
