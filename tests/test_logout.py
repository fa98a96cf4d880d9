import pytest

from storefront.services.session import SessionCredentials, clear_session


def test_clear_session_names_both_cookies():
    clearance = clear_session(SessionCredentials(access_token="a", refresh_token="r"))

    assert clearance.credential_names == ("accessToken", "refreshToken")
    assert clearance.message == "Logged out successfully"


def test_clear_session_without_credentials():
    clearance = clear_session(SessionCredentials())

    assert clearance.credential_names == ("accessToken", "refreshToken")


def _deleted_cookies(response):
    return {
        header.split("=", 1)[0]
        for header in response.headers.get_list("set-cookie")
        if "Max-Age=0" in header or "max-age=0" in header.lower()
    }


@pytest.mark.asyncio
async def test_logout_clears_cookies(client):
    client.cookies.set("accessToken", "some-access-token")
    client.cookies.set("refreshToken", "some-refresh-token")

    response = await client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"message": "Logged out successfully"}}
    assert _deleted_cookies(response) == {"accessToken", "refreshToken"}


@pytest.mark.asyncio
async def test_logout_without_cookies_still_succeeds(client):
    response = await client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert _deleted_cookies(response) == {"accessToken", "refreshToken"}


@pytest.mark.asyncio
async def test_logout_internal_fault(client, monkeypatch):
    def broken_clear_session(credentials):
        raise RuntimeError("cookie jar exploded")

    monkeypatch.setattr("storefront.api.auth.clear_session", broken_clear_session)

    response = await client.post("/api/auth/logout")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "An error occurred during logout"}
