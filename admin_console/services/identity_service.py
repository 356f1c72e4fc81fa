# admin_console/services/identity_service.py
import re
from typing import Any, Dict, List, Optional, Pattern

from admin_console.db.mongo import ADMINS, NO_PASSWORD, get_db


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class IdentityService:
    """
    The one place that joins office users and admins by email.
    An office user whose email also exists in `admins` is the same person
    holding admin capabilities.
    """

    def __init__(self) -> None:
        self.db = get_db()
        self.admins = self.db[ADMINS]

    async def admin_for_email(self, email: str) -> Optional[Dict[str, Any]]:
        normalized = normalize_email(email)
        if not normalized:
            return None
        return await self.admins.find_one({"email": normalized}, NO_PASSWORD)

    async def admin_emails(self) -> List[str]:
        docs = await self.admins.find({}, {"email": 1}).to_list(length=None)
        return [d["email"] for d in docs if d.get("email")]

    async def admin_email_patterns(self) -> List[Pattern]:
        """Exact, case-insensitive matchers for every admin email."""
        return [re.compile("^%s$" % re.escape(e), re.IGNORECASE) for e in await self.admin_emails()]
