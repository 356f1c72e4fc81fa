"""Office-user management, including office sessions that carry admin privileges."""

from conftest import admin_headers, missing_id, office_headers

from admin_console.db.mongo import ADMINS, OFFICE_USERS

USER_MGMT = {"userManagement": True, "dashboard": True, "reports": True, "settings": True}


async def test_list_excludes_admin_emails(client, super_admin, make_admin, make_office_user):
    await make_office_user(email="clerk@ocl.com", name="Clerk")
    await make_office_user(email="lead@ocl.com", name="Lead")
    await make_admin(email="lead@ocl.com", name="Lead")

    resp = await client.get("/api/admin/users", headers=admin_headers(super_admin))
    assert resp.status_code == 200
    emails = [u["email"] for u in resp.json()["data"]]
    assert emails == ["clerk@ocl.com"]
    assert resp.json()["pagination"]["totalCount"] == 1
    assert "password" not in resp.json()["data"][0]


async def test_list_excludes_inactive_admin_emails_too(client, super_admin, make_admin, make_office_user):
    await make_office_user(email="lead@ocl.com")
    await make_admin(email="lead@ocl.com", is_active=False)
    resp = await client.get("/api/admin/users", headers=admin_headers(super_admin))
    assert resp.json()["data"] == []


async def test_list_exclusion_ignores_email_case(client, super_admin, make_admin, make_office_user):
    await make_office_user(email="Lead@OCL.com")
    await make_admin(email="lead@ocl.com")
    resp = await client.get("/api/admin/users", headers=admin_headers(super_admin))
    assert resp.json()["data"] == []


async def test_list_search_by_department(client, super_admin, make_office_user):
    await make_office_user(email="a@ocl.com", department="Dispatch")
    await make_office_user(email="b@ocl.com", department="Accounts")
    resp = await client.get("/api/admin/users", params={"search": "acc"}, headers=admin_headers(super_admin))
    assert [u["email"] for u in resp.json()["data"]] == ["b@ocl.com"]


async def test_search_term_is_not_a_pattern(client, super_admin, make_office_user):
    await make_office_user(email="a@ocl.com", name="Asha")
    resp = await client.get("/api/admin/users", params={"search": "("}, headers=admin_headers(super_admin))
    assert resp.status_code == 200
    assert resp.json()["data"] == []


async def test_admin_without_user_management_denied(client, make_admin):
    admin = await make_admin(permissions={"dashboard": True, "userManagement": False})
    resp = await client.get("/api/admin/users", headers=admin_headers(admin))
    assert resp.status_code == 403


async def test_admin_with_user_management_allowed(client, make_admin, make_office_user):
    admin = await make_admin(permissions=USER_MGMT)
    await make_office_user()
    resp = await client.get("/api/admin/users", headers=admin_headers(admin))
    assert resp.status_code == 200


class TestDualIdentity:
    async def test_office_user_with_active_admin_record(self, client, make_admin, make_office_user):
        user = await make_office_user(email="lead@ocl.com")
        await make_admin(email="lead@ocl.com", permissions=USER_MGMT)
        resp = await client.get("/api/admin/users", headers=office_headers(user))
        assert resp.status_code == 200

    async def test_admin_record_permissions_decide(self, client, make_admin, make_office_user):
        # the office map says yes, the admin map says no
        user = await make_office_user(email="lead@ocl.com", permissions={"userManagement": True})
        await make_admin(email="lead@ocl.com", permissions={"dashboard": True, "userManagement": False})
        resp = await client.get("/api/admin/users", headers=office_headers(user))
        assert resp.status_code == 403

    async def test_inactive_admin_record_is_forbidden_not_unauthenticated(self, client, make_admin, make_office_user):
        user = await make_office_user(email="lead@ocl.com")
        await make_admin(email="lead@ocl.com", permissions=USER_MGMT, is_active=False)
        resp = await client.get("/api/admin/users", headers=office_headers(user))
        assert resp.status_code == 403
        assert resp.json()["code"] == "forbidden"

    async def test_no_admin_record_is_forbidden(self, client, make_office_user):
        user = await make_office_user(email="clerk@ocl.com")
        resp = await client.get("/api/admin/users", headers=office_headers(user))
        assert resp.status_code == 403

    async def test_removed_admin_record_revokes_access(self, client, db, make_admin, make_office_user):
        user = await make_office_user(email="lead@ocl.com")
        admin = await make_admin(email="lead@ocl.com", permissions=USER_MGMT)
        assert (await client.get("/api/admin/users", headers=office_headers(user))).status_code == 200
        await db[ADMINS].delete_one({"_id": admin["_id"]})
        assert (await client.get("/api/admin/users", headers=office_headers(user))).status_code == 403

    async def test_inactive_office_user_is_unauthenticated(self, client, make_admin, make_office_user):
        user = await make_office_user(email="lead@ocl.com", is_active=False)
        await make_admin(email="lead@ocl.com", permissions=USER_MGMT)
        resp = await client.get("/api/admin/users", headers=office_headers(user))
        assert resp.status_code == 401


async def test_get_user(client, super_admin, make_office_user):
    user = await make_office_user()
    resp = await client.get(f"/api/admin/users/{user['_id']}", headers=admin_headers(super_admin))
    assert resp.status_code == 200
    assert resp.json()["data"]["email"] == "clerk@ocl.com"


async def test_get_missing_user(client, super_admin):
    resp = await client.get(f"/api/admin/users/{missing_id()}", headers=admin_headers(super_admin))
    assert resp.status_code == 404


async def test_update_user_details(client, db, super_admin, make_office_user):
    user = await make_office_user()
    resp = await client.put(
        f"/api/admin/users/{user['_id']}",
        json={"department": "Accounts"},
        headers=admin_headers(super_admin),
    )
    assert resp.status_code == 200
    assert (await db[OFFICE_USERS].find_one({"_id": user["_id"]}))["department"] == "Accounts"


async def test_update_user_email_not_allowed(client, super_admin, make_office_user):
    user = await make_office_user()
    resp = await client.put(
        f"/api/admin/users/{user['_id']}",
        json={"email": "other@ocl.com"},
        headers=admin_headers(super_admin),
    )
    assert resp.status_code == 400


async def test_update_user_permissions_requires_assigner(client, make_admin, make_office_user):
    admin = await make_admin(permissions=USER_MGMT, can_assign=False)
    user = await make_office_user()
    resp = await client.put(
        f"/api/admin/users/{user['_id']}/permissions",
        json={"permissions": {"pincodeManagement": True}},
        headers=admin_headers(admin),
    )
    assert resp.status_code == 403


async def test_update_user_permissions(client, db, make_admin, make_office_user):
    admin = await make_admin(permissions=USER_MGMT, can_assign=True)
    user = await make_office_user()
    resp = await client.put(
        f"/api/admin/users/{user['_id']}/permissions",
        json={"permissions": {"pincodeManagement": True}},
        headers=admin_headers(admin),
    )
    assert resp.status_code == 200
    stored = await db[OFFICE_USERS].find_one({"_id": user["_id"]})
    assert stored["permissions"]["pincodeManagement"] is True
    assert stored["permissions"]["dashboard"] is False


async def test_assigner_flag_without_user_management_denied(client, make_admin, make_office_user):
    admin = await make_admin(permissions={"dashboard": True}, can_assign=True)
    user = await make_office_user()
    resp = await client.put(
        f"/api/admin/users/{user['_id']}/permissions",
        json={"permissions": {}},
        headers=admin_headers(admin),
    )
    assert resp.status_code == 403


async def test_set_status(client, db, super_admin, make_office_user):
    user = await make_office_user()
    resp = await client.put(
        f"/api/admin/users/{user['_id']}/status", json={"isActive": False}, headers=admin_headers(super_admin)
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "User deactivated successfully."
    assert (await db[OFFICE_USERS].find_one({"_id": user["_id"]}))["isActive"] is False


async def test_set_status_requires_boolean(client, super_admin, make_office_user):
    user = await make_office_user()
    resp = await client.put(
        f"/api/admin/users/{user['_id']}/status", json={"isActive": "no"}, headers=admin_headers(super_admin)
    )
    assert resp.status_code == 400


async def test_delete_user(client, db, super_admin, make_office_user):
    user = await make_office_user()
    resp = await client.delete(f"/api/admin/users/{user['_id']}", headers=admin_headers(super_admin))
    assert resp.status_code == 200
    assert await db[OFFICE_USERS].find_one({"_id": user["_id"]}) is None


async def test_delete_missing_user(client, super_admin):
    resp = await client.delete(f"/api/admin/users/{missing_id()}", headers=admin_headers(super_admin))
    assert resp.status_code == 404
