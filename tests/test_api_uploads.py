import os

from app.core.config import get_settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _stored_path(filename: str) -> str:
    return os.path.join(get_settings().project_upload_dir, filename)


def test_upload_and_delete_image(client, auth_headers) -> None:
    response = client.post(
        "/api/upload/image",
        files={"image": ("foto.PNG", PNG_BYTES, "image/png")},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    filename = body["filename"]
    assert filename.startswith("project-") and filename.endswith(".png")
    assert body["imagePath"] == f"/uploads/projects/{filename}"
    assert os.path.exists(_stored_path(filename))

    served = client.get(body["imagePath"])
    assert served.status_code == 200
    assert served.content == PNG_BYTES

    deleted = client.delete(f"/api/upload/image/{filename}", headers=auth_headers)
    assert deleted.status_code == 200
    assert not os.path.exists(_stored_path(filename))


def test_upload_rejects_non_images(client, auth_headers) -> None:
    response = client.post(
        "/api/upload/image",
        files={"image": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json()["category"] == "validation"


def test_upload_without_file(client, auth_headers) -> None:
    response = client.post("/api/upload/image", headers=auth_headers)

    assert response.status_code == 400


def test_upload_rejects_oversized_file(client, auth_headers) -> None:
    too_big = b"\x00" * (6 * 1024 * 1024)

    response = client.post(
        "/api/upload/image",
        files={"image": ("big.jpg", too_big, "image/jpeg")},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert "muito grande" in response.json()["error"]


def test_delete_image_rejects_foreign_names(client, auth_headers) -> None:
    response = client.delete("/api/upload/image/..%2Fapp.db", headers=auth_headers)

    assert response.status_code in (400, 404)
    assert client.delete("/api/upload/image/passwd", headers=auth_headers).status_code == 400


def test_delete_missing_image(client, auth_headers) -> None:
    response = client.delete(f"/api/upload/image/project-{'0' * 32}.png", headers=auth_headers)

    assert response.status_code == 404


def test_upload_requires_auth(client) -> None:
    response = client.post("/api/upload/image", files={"image": ("foto.png", PNG_BYTES, "image/png")})

    assert response.status_code == 401
