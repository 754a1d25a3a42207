"""OTP endpoints — HTTP status codes and bodies."""

from intake.services.otp_service import otp_cache_key


async def test_send_then_verify(client, cache, mailer):
    resp = await client.post("/send-otp", json={"email": "User@Example.com"})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "OTP sent to email"}
    code = await cache.get(otp_cache_key("user@example.com"))
    assert mailer.sent[0]["to"] == "user@example.com"

    resp = await client.post("/verify-otp", json={"email": "user@example.com ", "otp": code})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "OTP verified"}

    resp = await client.post("/verify-otp", json={"email": "user@example.com", "otp": code})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid or expired OTP"}


async def test_send_otp_validation(client):
    resp = await client.post("/send-otp", json={})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Email is required"}

    resp = await client.post("/send-otp", json={"email": "nope"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid email format"}


async def test_verify_otp_missing_fields(client):
    resp = await client.post("/verify-otp", json={"email": "user@example.com"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Email and OTP are required"}


async def test_expired_code_rejected(client, cache, clock):
    await client.post("/send-otp", json={"email": "user@example.com"})
    code = await cache.get(otp_cache_key("user@example.com"))
    clock.advance(301)

    resp = await client.post("/verify-otp", json={"email": "user@example.com", "otp": code})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid or expired OTP"}


async def test_numeric_otp_is_rejected_not_coerced(client, cache):
    await client.post("/send-otp", json={"email": "user@example.com"})
    code = await cache.get(otp_cache_key("user@example.com"))

    resp = await client.post(
        "/verify-otp", json={"email": "user@example.com", "otp": int(code)},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid or expired OTP"}


async def test_email_failure_returns_500_without_detail(client, mailer):
    mailer.fail = True
    resp = await client.post("/send-otp", json={"email": "user@example.com"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to send OTP"}


async def test_malformed_json_is_400(client):
    resp = await client.post(
        "/send-otp", content=b"{oops", headers={"content-type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request data"}
