"""Identity endpoints — advisory checks and /store-data."""

STORE_BODY = {
    "email": "Asha@Example.com",
    "phone": "9000000001",
    "aadharNumber": "111122223333",
    "applicationNumber": "APP-001",
}


async def test_store_then_checks(client):
    resp = await client.post("/store-data", json=STORE_BODY)
    assert resp.status_code == 201
    assert resp.json() == {"success": True}

    resp = await client.post("/check-email", json={"email": "asha@example.com"})
    assert resp.json() == {"exists": True}
    resp = await client.post("/check-phone", json={"phone": "9000000001"})
    assert resp.json() == {"exists": True}
    resp = await client.post("/check-aadhar", json={"aadhar": "111122223333"})
    assert resp.json() == {"exists": True}
    resp = await client.post("/check-aadhar", json={"aadhar": "999999999999"})
    assert resp.json() == {"exists": False}


async def test_store_duplicate_is_409(client):
    assert (await client.post("/store-data", json=STORE_BODY)).status_code == 201
    resp = await client.post(
        "/store-data", json={**STORE_BODY, "email": " asha@EXAMPLE.com"},
    )
    assert resp.status_code == 409
    assert resp.json() == {"error": "Data already exists"}


async def test_store_missing_fields_is_400(client):
    resp = await client.post("/store-data", json={"email": "a@b.com", "phone": "1"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Email, Phone, and Aadhar are required"}


async def test_check_endpoints_require_input(client):
    for path, message in (
        ("/check-email", "Email is required"),
        ("/check-phone", "Phone is required"),
        ("/check-aadhar", "Aadhar is required"),
    ):
        resp = await client.post(path, json={})
        assert resp.status_code == 400
        assert resp.json() == {"error": message}


async def test_check_email_invalid_format(client):
    resp = await client.post("/check-email", json={"email": "no-at-sign"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid email format"}


async def test_check_email_finds_legacy_mixed_case_record(client, applicants):
    await applicants.create_document({
        "email": "Legacy@B.com", "phone": "1", "aadhar_number": "1",
    })
    resp = await client.post("/check-email", json={"email": "legacy@b.com"})
    assert resp.json() == {"exists": True}


async def test_numeric_identity_fields_are_accepted(client):
    resp = await client.post("/store-data", json={
        "email": "num@example.com",
        "phone": 9876543210,
        "aadharNumber": 111122223333,
        "applicationNumber": 42,
    })
    assert resp.status_code == 201

    resp = await client.post("/check-phone", json={"phone": 9876543210})
    assert resp.status_code == 200
    assert resp.json() == {"exists": True}
    resp = await client.post("/check-aadhar", json={"aadhar": 111122223333})
    assert resp.json() == {"exists": True}


async def test_numeric_store_matches_string_duplicate(client):
    await client.post("/store-data", json={
        "email": "one@example.com", "phone": 9876543210, "aadharNumber": "1",
    })
    resp = await client.post("/store-data", json={
        "email": "two@example.com", "phone": "9876543210", "aadharNumber": "2",
    })
    assert resp.status_code == 409
