import pytest

from app.services.files import build_blob_name, normalize_folder
from conftest import BLOB_SERVICE_URL

UPLOAD_URL = "/api/upload"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.mark.parametrize(
    "folder, expected",
    [
        (None, "farmer-profiles"),
        ("", "farmer-profiles"),
        ("Products", "products"),
        ("/products/gallery/", "products/gallery"),
        ("../../etc", "etc"),
        ("My Farm Photos", "my-farm-photos"),
    ],
)
def test_normalize_folder(folder, expected):
    assert normalize_folder(folder) == expected


def test_build_blob_name_uses_jpg_extension():
    blob_name = build_blob_name("user-1", "products", "image/jpeg")
    assert blob_name.startswith("fresh-harvest/products/user-1/")
    assert blob_name.endswith(".jpg")


async def test_upload_relays_to_blob_storage(client, farmer_headers, blob_client):
    me = (await client.get("/api/auth/user", headers=farmer_headers)).json()

    response = await client.post(
        UPLOAD_URL,
        files={"file": ("tomatoes.png", PNG_BYTES, "image/png")},
        data={"folder": "products"},
        headers=farmer_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["public_id"].startswith(f"fresh-harvest/products/{me['_id']}/")
    assert body["public_id"].endswith(".png")
    assert body["url"] == f"{BLOB_SERVICE_URL}user-content/{body['public_id']}"
    blob_client.upload_blob.assert_awaited_once()


async def test_upload_defaults_to_profile_folder(client, consumer_headers):
    response = await client.post(
        UPLOAD_URL,
        files={"file": ("me.png", PNG_BYTES, "image/png")},
        headers=consumer_headers,
    )
    assert response.status_code == 201
    assert "/farmer-profiles/" in response.json()["public_id"]


async def test_upload_requires_session(client, blob_client):
    response = await client.post(
        UPLOAD_URL, files={"file": ("tomatoes.png", PNG_BYTES, "image/png")}
    )
    assert response.status_code == 401
    blob_client.upload_blob.assert_not_awaited()


async def test_upload_rejects_non_images(client, farmer_headers, blob_client):
    response = await client.post(
        UPLOAD_URL,
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=farmer_headers,
    )
    assert response.status_code == 400
    blob_client.upload_blob.assert_not_awaited()


async def test_upload_requires_file(client, farmer_headers):
    response = await client.post(UPLOAD_URL, data={"folder": "x"}, headers=farmer_headers)
    assert response.status_code == 400


async def test_blob_failure_is_reported_generically(client, farmer_headers, blob_client):
    blob_client.upload_blob.side_effect = RuntimeError("storage account unreachable")

    response = await client.post(
        UPLOAD_URL,
        files={"file": ("tomatoes.png", PNG_BYTES, "image/png")},
        headers=farmer_headers,
    )

    assert response.status_code == 500
    assert response.json() == {"detail": "Upload failed"}
