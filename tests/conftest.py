"""Shared fixtures: an in-memory Motor client, the ASGI app, record factories."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from admin_console.core.permissions import (
    ROLE_ADMIN,
    ROLE_SUPER_ADMIN,
    default_office_permissions,
    full_admin_permissions,
    normalize_admin_permissions,
)
from admin_console.core.security import SUBJECT_ADMIN, SUBJECT_OFFICE, create_access_token, hash_password
from admin_console.db import mongo
from admin_console.main import app
from admin_console.models.utils import utcnow

PASSWORD = "secret123"


@pytest.fixture(scope="session")
def password_hash():
    # bcrypt is slow; hash once per run
    return hash_password(PASSWORD)


@pytest_asyncio.fixture
async def db():
    mongo.set_client(AsyncMongoMockClient())
    await mongo.ensure_indexes()
    yield mongo.get_db()
    mongo.set_client(None)


@pytest_asyncio.fixture
async def client(db):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_admin(db, password_hash):
    async def _make(
        email="staff@ocl.com",
        name="Staff Admin",
        role=ROLE_ADMIN,
        permissions=None,
        can_assign=False,
        is_active=True,
        assigned_by=None,
    ):
        if permissions is None:
            permissions = full_admin_permissions() if role == ROLE_SUPER_ADMIN else normalize_admin_permissions()
        now = utcnow()
        doc = {
            "email": email,
            "password": password_hash,
            "name": name,
            "role": role,
            "permissions": permissions,
            "canAssignPermissions": can_assign,
            "assignedBy": assigned_by,
            "isActive": is_active,
            "lastLogin": None,
            "loginCount": 0,
            "createdAt": now,
            "updatedAt": now,
        }
        res = await db[mongo.ADMINS].insert_one(doc)
        doc["_id"] = res.inserted_id
        return doc

    return _make


@pytest.fixture
def make_office_user(db, password_hash):
    async def _make(email="clerk@ocl.com", name="Office Clerk", department="Dispatch", permissions=None, is_active=True):
        now = utcnow()
        doc = {
            "email": email,
            "password": password_hash,
            "name": name,
            "role": "office_user",
            "department": department,
            "phone": "9876543210",
            "isActive": is_active,
            "permissions": permissions if permissions is not None else default_office_permissions(),
            "createdAt": now,
            "updatedAt": now,
        }
        res = await db[mongo.OFFICE_USERS].insert_one(doc)
        doc["_id"] = res.inserted_id
        return doc

    return _make


@pytest_asyncio.fixture
async def super_admin(make_admin):
    return await make_admin(email="admin@ocl.com", name="Default Admin", role=ROLE_SUPER_ADMIN, can_assign=True)


def admin_headers(admin_doc) -> dict:
    return {"Authorization": f"Bearer {create_access_token(str(admin_doc['_id']), SUBJECT_ADMIN)}"}


def office_headers(user_doc) -> dict:
    return {"Authorization": f"Bearer {create_access_token(str(user_doc['_id']), SUBJECT_OFFICE)}"}


def missing_id() -> str:
    return str(ObjectId())

