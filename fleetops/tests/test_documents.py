"""
Integration tests for document upload, retrieval and deletion.
"""

import os
import pytest
from fleetops.app.core.config import Settings, settings
from fleetops.app.models.enums import UserRole
from fleetops.app.services.document_storage import DocumentStorage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
PDF_BYTES = b"%PDF-1.4\n%fake\n"


def stored_files(storage):
    if not storage.upload_dir.exists():
        return []
    return sorted(os.listdir(storage.upload_dir))


async def upload(client, headers, entity_id, files, entity_type="vehicle", document_type="photo"):
    return await client.post(
        "/api/documents/upload",
        headers=headers,
        data={"entity_id": entity_id, "entity_type": entity_type, "document_type": document_type},
        files=[("files", f) for f in files],
    )


def test_default_upload_limits_are_five_files_of_ten_megabytes():
    assert Settings.model_fields["max_upload_files"].default == 5
    assert Settings.model_fields["max_upload_bytes"].default == 10 * 1024 * 1024

    storage = DocumentStorage()
    assert storage.max_files == settings.max_upload_files
    assert storage.max_file_size == settings.max_upload_bytes


@pytest.mark.asyncio
async def test_upload_list_view_download(client, admin_headers, vehicle, upload_storage):
    response = await upload(client, admin_headers, vehicle["id"], [
        ("front.png", PNG_BYTES, "image/png"),
        ("insurance.pdf", PDF_BYTES, "application/pdf"),
    ])

    assert response.status_code == 201, response.text
    documents = response.json()["documents"]
    assert len(documents) == 2
    assert {d["file_name"] for d in documents} == {"front.png", "insurance.pdf"}
    assert all(d["uploaded_by"] == "admin" for d in documents)
    assert len(stored_files(upload_storage)) == 2
    assert all(name.startswith("files-") for name in stored_files(upload_storage))

    listing = await client.get(f"/api/documents/vehicle/{vehicle['id']}", headers=admin_headers)
    assert listing.status_code == 200
    assert len(listing.json()) == 2

    png = next(d for d in documents if d["file_name"] == "front.png")
    view = await client.get(f"/api/documents/{png['id']}/view", headers=admin_headers)
    assert view.status_code == 200
    assert view.headers["content-type"] == "image/png"
    assert view.headers["content-disposition"].startswith("inline")
    assert view.content == PNG_BYTES

    download = await client.get(f"/api/documents/{png['id']}/download", headers=admin_headers)
    assert download.status_code == 200
    assert download.headers["content-disposition"].startswith("attachment")
    assert download.content == PNG_BYTES


@pytest.mark.asyncio
async def test_upload_rejects_disallowed_type(client, admin_headers, vehicle, upload_storage):
    response = await upload(client, admin_headers, vehicle["id"], [
        ("notes.txt", b"hello", "text/plain"),
    ])

    assert response.status_code == 400
    assert response.json()["message"] == "Only images, PDFs, and documents are allowed"
    assert stored_files(upload_storage) == []


@pytest.mark.asyncio
async def test_upload_rejects_extension_mime_mismatch(client, admin_headers, vehicle, upload_storage):
    response = await upload(client, admin_headers, vehicle["id"], [
        ("script.exe", PNG_BYTES, "image/png"),
    ])
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_upload_accepts_word_documents(client, admin_headers, vehicle, upload_storage):
    response = await upload(client, admin_headers, vehicle["id"], [
        ("permit.doc", b"doc-bytes", "application/msword"),
        ("contract.docx", b"docx-bytes",
         "application/vnd.openxmlformats-officedocument.wordprocessingml.document"),
    ], document_type="permit")

    assert response.status_code == 201
    assert [d["content_type"] for d in response.json()["documents"]] == [
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ]


@pytest.mark.asyncio
async def test_upload_rejects_more_than_five_files(client, admin_headers, vehicle, upload_storage):
    files = [(f"photo{i}.png", PNG_BYTES, "image/png") for i in range(6)]

    response = await upload(client, admin_headers, vehicle["id"], files)

    assert response.status_code == 400
    assert response.json()["details"] == {"max_files": 5, "received": 6}
    assert stored_files(upload_storage) == []


@pytest.mark.asyncio
async def test_upload_rejects_oversized_file_and_cleans_up(client, admin_headers, vehicle, upload_storage):
    too_big = b"\x00" * (upload_storage.max_file_size + 1)

    response = await upload(client, admin_headers, vehicle["id"], [
        ("small.png", PNG_BYTES, "image/png"),
        ("huge.png", too_big, "image/png"),
    ])

    assert response.status_code == 413
    assert response.json()["error_code"] == "ERR_UPLOAD_001"
    assert stored_files(upload_storage) == []

    listing = await client.get(f"/api/documents/vehicle/{vehicle['id']}", headers=admin_headers)
    assert listing.json() == []


@pytest.mark.asyncio
async def test_upload_for_missing_entity_is_404(client, admin_headers, upload_storage):
    response = await upload(client, admin_headers, "no-such-trip", [
        ("receipt.png", PNG_BYTES, "image/png"),
    ], entity_type="trip")

    assert response.status_code == 404
    assert stored_files(upload_storage) == []


@pytest.mark.asyncio
async def test_upload_rejects_unknown_entity_type(client, admin_headers, vehicle, upload_storage):
    response = await upload(client, admin_headers, vehicle["id"], [
        ("receipt.png", PNG_BYTES, "image/png"),
    ], entity_type="spaceship")

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delete_by_uploader_removes_file(client, driver_headers, driver_profile, upload_storage):
    response = await upload(client, driver_headers, driver_profile["id"], [
        ("license.pdf", PDF_BYTES, "application/pdf"),
    ], entity_type="driver", document_type="license")
    assert response.status_code == 201
    document_id = response.json()["documents"][0]["id"]

    deleted = await client.delete(f"/api/documents/{document_id}", headers=driver_headers)

    assert deleted.status_code == 200
    assert deleted.json()["file_removed"] is True
    assert stored_files(upload_storage) == []

    gone = await client.get(f"/api/documents/{document_id}/view", headers=driver_headers)
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_delete_by_other_driver_is_forbidden(client, admin_headers, vehicle, user_factory, upload_storage):
    response = await upload(client, admin_headers, vehicle["id"], [
        ("front.png", PNG_BYTES, "image/png"),
    ])
    document_id = response.json()["documents"][0]["id"]

    _, stranger_headers = await user_factory("stranger", UserRole.DRIVER)
    forbidden = await client.delete(f"/api/documents/{document_id}", headers=stranger_headers)
    assert forbidden.status_code == 403

    _, manager_headers = await user_factory("ops-manager", UserRole.MANAGER)
    allowed = await client.delete(f"/api/documents/{document_id}", headers=manager_headers)
    assert allowed.status_code == 200


@pytest.mark.asyncio
async def test_missing_file_on_disk_is_404(client, admin_headers, vehicle, upload_storage):
    response = await upload(client, admin_headers, vehicle["id"], [
        ("front.png", PNG_BYTES, "image/png"),
    ])
    document = response.json()["documents"][0]
    for name in stored_files(upload_storage):
        os.remove(upload_storage.upload_dir / name)

    view = await client.get(f"/api/documents/{document['id']}/view", headers=admin_headers)
    assert view.status_code == 404
    assert view.json()["message"] == "File not found on disk"

    deleted = await client.delete(f"/api/documents/{document['id']}", headers=admin_headers)
    assert deleted.status_code == 200
    assert deleted.json()["file_removed"] is False


@pytest.mark.asyncio
async def test_file_is_kept_when_row_delete_fails(client, admin_headers, vehicle, upload_storage, mocker):
    response = await upload(client, admin_headers, vehicle["id"], [
        ("front.png", PNG_BYTES, "image/png"),
    ])
    document_id = response.json()["documents"][0]["id"]
    delete_file = mocker.spy(upload_storage, "delete")

    mocker.patch(
        "sqlalchemy.ext.asyncio.AsyncSession.commit",
        side_effect=RuntimeError("database unavailable")
    )
    with pytest.raises(RuntimeError):
        await client.delete(f"/api/documents/{document_id}", headers=admin_headers)
    mocker.stopall()

    delete_file.assert_not_called()
    assert len(stored_files(upload_storage)) == 1

    view = await client.get(f"/api/documents/{document_id}/view", headers=admin_headers)
    assert view.status_code == 200
