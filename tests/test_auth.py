from datetime import timedelta

from sqlalchemy import select

from app.core.security import create_access_token
from app.db.base_class import utcnow
from app.models.user import AuthToken


async def test_login_with_username_or_email(client, admin_user):
    by_name = await client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert by_name.status_code == 200
    body = by_name.json()
    assert body["message"] == "Login successful"
    assert body["user"]["username"] == "admin"
    assert body["user"]["last_login"] is not None

    by_email = await client.post("/api/auth/login", json={"username": "admin@example.com", "password": "admin123"})
    assert by_email.status_code == 200


async def test_login_with_bad_password(client, admin_user):
    response = await client.post("/api/auth/login", json={"username": "admin", "password": "wrong-password"})
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid credentials"}


async def test_me_requires_a_token(client):
    response = await client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["message"] == "Access token required"


async def test_unknown_token_is_forbidden(client, admin_user):
    # signed correctly but never issued
    token, _ = create_access_token({"sub": str(admin_user.id)})
    response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 403
    assert response.json()["message"] == "Token has been revoked"

    garbage = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert garbage.status_code == 403


async def test_logout_revokes_token(client, admin_headers):
    assert (await client.get("/api/auth/me", headers=admin_headers)).status_code == 200

    assert (await client.post("/api/auth/logout", headers=admin_headers)).status_code == 200

    assert (await client.get("/api/auth/me", headers=admin_headers)).status_code == 403


async def test_refresh_rotates_token(client, admin_headers):
    refreshed = await client.post("/api/auth/refresh", headers=admin_headers)
    assert refreshed.status_code == 200
    new_headers = {"Authorization": f"Bearer {refreshed.json()['token']}"}

    assert (await client.get("/api/auth/me", headers=new_headers)).status_code == 200
    assert (await client.get("/api/auth/me", headers=admin_headers)).status_code == 403


async def test_non_admin_is_forbidden(client, admin_headers):
    created = await client.post("/api/dashboard/users", headers=admin_headers, json={
        "username": "editor", "email": "editor@example.com", "password": "secret12",
    })
    assert created.status_code == 201
    assert created.json()["data"]["role"] == "user"

    login = await client.post("/api/auth/login", json={"username": "editor", "password": "secret12"})
    user_headers = {"Authorization": f"Bearer {login.json()['token']}"}

    response = await client.get("/api/quizzes", headers=user_headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Admin access required"


async def test_login_drops_expired_tokens(client, db, admin_user):
    db.add(AuthToken(user_id=admin_user.id, token="stale", expires_at=utcnow() - timedelta(minutes=1)))
    await db.commit()

    response = await client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200

    tokens = (await db.execute(select(AuthToken.token).where(AuthToken.user_id == admin_user.id))).scalars().all()
    assert tokens == [response.json()["token"]]
