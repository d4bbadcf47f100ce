from datetime import datetime, timedelta, timezone

import pytest

from app.core.route_guard import PathKind, classify_path, decide
from app.models.session import SessionClaims
from app.models.user import UserRole
from conftest import signup


def session(role: UserRole) -> SessionClaims:
    return SessionClaims(
        sub="user-1", role=role, exp=datetime.now(timezone.utc) + timedelta(hours=1)
    )


@pytest.mark.parametrize(
    "path, kind",
    [
        ("/login", PathKind.PUBLIC),
        ("/signup", PathKind.PUBLIC),
        ("/register/", PathKind.PUBLIC),
        ("/farmer", PathKind.FARMER),
        ("/farmer/products/new", PathKind.FARMER),
        ("/farmers-market", PathKind.UNGUARDED),
        ("/dashboard", PathKind.PROTECTED),
        ("/dashboard/orders", PathKind.PROTECTED),
        ("/api/farmer/products", PathKind.UNGUARDED),
        ("/", PathKind.UNGUARDED),
    ],
)
def test_classify_path(path, kind):
    assert classify_path(path) is kind


@pytest.mark.parametrize(
    "path, role, expected",
    [
        ("/dashboard", None, "/login"),
        ("/farmer/products", None, "/login"),
        ("/login", None, None),
        ("/signup", None, None),
        ("/farmer/products", UserRole.CONSUMER, "/dashboard"),
        ("/farmer/profile", UserRole.ADMIN, "/dashboard"),
        ("/farmer/products", UserRole.FARMER, None),
        ("/login", UserRole.FARMER, "/dashboard"),
        ("/register", UserRole.CONSUMER, "/dashboard"),
        ("/dashboard", UserRole.CONSUMER, None),
        ("/api/auth/user", None, None),
    ],
)
def test_decide(path, role, expected):
    decision = decide(path, session(role) if role else None)
    assert decision.redirect_to == expected
    assert decision.allowed is (expected is None)


async def _login_cookie(client, email, role=None):
    await signup(client, "Guarded", email, role=role)
    response = await client.post(
        "/api/auth/login", json={"email": email, "password": "secret1"}
    )
    assert response.status_code == 200


async def test_unauthenticated_navigation_redirects_to_login(client):
    response = await client.get("/dashboard")
    assert response.status_code == 307
    assert response.headers["location"] == "/login"


async def test_authenticated_user_is_sent_away_from_login(client):
    await _login_cookie(client, "ana@x.com")

    response = await client.get("/login")

    assert response.status_code == 307
    assert response.headers["location"] == "/dashboard"


async def test_consumer_is_sent_away_from_farmer_pages(client):
    await _login_cookie(client, "ana@x.com")

    response = await client.get("/farmer/products")

    assert response.status_code == 307
    assert response.headers["location"] == "/dashboard"


async def test_farmer_passes_through_to_farmer_pages(client):
    await _login_cookie(client, "joe@x.com", role="FARMER")

    response = await client.get("/farmer/products")

    # No page is mounted there; the guard let the request reach routing.
    assert response.status_code == 404


async def test_dashboard_with_session(client):
    await _login_cookie(client, "joe@x.com", role="FARMER")

    response = await client.get("/dashboard")

    assert response.status_code == 200
    assert response.json()["role"] == "FARMER"


async def test_invalid_cookie_counts_as_no_session(client):
    client.cookies.set("fhc_session", "not-a-token")
    response = await client.get("/dashboard")
    assert response.status_code == 307
    assert response.headers["location"] == "/login"


async def test_api_is_never_redirected(client):
    response = await client.get("/api/farmer/products")
    assert response.status_code == 401
