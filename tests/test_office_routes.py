"""Office-side login and the routes gated by an office user's own permissions."""

from conftest import PASSWORD, admin_headers, office_headers

from admin_console.db.mongo import PINCODES


async def test_office_login(client, make_office_user):
    await make_office_user(email="clerk@ocl.com", permissions={"pincodeManagement": True})
    resp = await client.post("/api/office/login", json={"email": "clerk@ocl.com", "password": PASSWORD})
    assert resp.status_code == 200
    body = resp.json()
    assert body["user"]["email"] == "clerk@ocl.com"
    assert body["user"]["permissions"]["pincodeManagement"] is True

    profile = await client.get("/api/office/profile", headers={"Authorization": f"Bearer {body['token']}"})
    assert profile.status_code == 200
    assert "password" not in profile.json()["user"]


async def test_office_login_inactive(client, make_office_user):
    await make_office_user(is_active=False)
    resp = await client.post("/api/office/login", json={"email": "clerk@ocl.com", "password": PASSWORD})
    assert resp.status_code == 401
    assert resp.json()["code"] == "account_inactive"


async def test_admin_token_rejected_on_office_profile(client, super_admin):
    resp = await client.get("/api/office/profile", headers=admin_headers(super_admin))
    assert resp.status_code == 401
    assert resp.json()["code"] == "token_wrong_subject"


async def test_office_pincodes_follow_office_map(client, db, make_office_user):
    await db[PINCODES].insert_one(
        {"pincode": 110001, "areaname": "Connaught Place", "cityname": "New Delhi", "districtname": "Central Delhi", "statename": "Delhi"}
    )
    allowed = await make_office_user(email="ops@ocl.com", permissions={"pincodeManagement": True})
    denied = await make_office_user(email="desk@ocl.com")

    ok = await client.get("/api/office/pincodes", headers=office_headers(allowed))
    assert ok.status_code == 200
    assert ok.json()["pagination"]["totalCount"] == 1

    assert (await client.get("/api/office/pincodes", headers=office_headers(denied))).status_code == 403

    export = await client.get("/api/office/pincodes/export", headers=office_headers(allowed))
    assert export.status_code == 200
    assert '"110001","Connaught Place"' in export.text


async def test_admin_token_rejected_on_office_pincodes(client, super_admin):
    resp = await client.get("/api/office/pincodes", headers=admin_headers(super_admin))
    assert resp.status_code == 401


async def test_office_pincode_writes(client, db, make_office_user):
    user = await make_office_user(email="ops@ocl.com", permissions={"pincodeManagement": True})
    headers = office_headers(user)

    created = await client.post(
        "/api/office/pincodes",
        json={"pincode": 560001, "areaname": "MG Road", "cityname": "Bengaluru", "statename": "Karnataka"},
        headers=headers,
    )
    assert created.status_code == 200
    pincode_id = created.json()["data"]["_id"]
    assert created.json()["data"]["districtname"] == "Bengaluru"

    dup = await client.post(
        "/api/office/pincodes",
        json={"pincode": 560001, "areaname": "MG Road", "cityname": "Bengaluru", "statename": "Karnataka"},
        headers=headers,
    )
    assert dup.status_code == 409

    updated = await client.put(f"/api/office/pincodes/{pincode_id}", json={"serviceable": True}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["data"]["serviceable"] is True

    deleted = await client.delete(f"/api/office/pincodes/{pincode_id}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json()["deletedData"]["pincode"] == 560001
    assert await db[PINCODES].count_documents({}) == 0


async def test_office_pincode_writes_need_office_flag(client, db, make_office_user, make_admin):
    res = await db[PINCODES].insert_one(
        {"pincode": 110001, "areaname": "Connaught Place", "cityname": "New Delhi", "districtname": "Central Delhi", "statename": "Delhi"}
    )
    # an admin record with the capability does not open office-only routes
    user = await make_office_user(email="lead@ocl.com")
    await make_admin(email="lead@ocl.com", permissions={"pincodeManagement": True})
    headers = office_headers(user)

    body = {"pincode": 560001, "areaname": "MG Road", "cityname": "Bengaluru", "statename": "Karnataka"}
    assert (await client.post("/api/office/pincodes", json=body, headers=headers)).status_code == 403
    assert (await client.put(f"/api/office/pincodes/{res.inserted_id}", json={"serviceable": True}, headers=headers)).status_code == 403
    assert (await client.delete(f"/api/office/pincodes/{res.inserted_id}", headers=headers)).status_code == 403
    assert await db[PINCODES].count_documents({}) == 1


async def test_admin_token_rejected_on_office_pincode_writes(client, db, super_admin):
    resp = await client.post(
        "/api/office/pincodes",
        json={"pincode": 560001, "areaname": "MG Road", "cityname": "Bengaluru", "statename": "Karnataka"},
        headers=admin_headers(super_admin),
    )
    assert resp.status_code == 401
    assert await db[PINCODES].count_documents({}) == 0
