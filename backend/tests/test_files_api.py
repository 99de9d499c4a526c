PETS = "/api/v1/pets"
FILES = "/api/v1/files"


def _add_file(client, auth, pet, user_id="u1", **payload):
    return client.post(f"{PETS}/{pet['id']}/files", json=payload, headers=auth(user_id))


def test_first_photo_becomes_primary(client, auth, create_pet):
    pet = create_pet("u1")

    first = _add_file(client, auth, pet, storage_id="blob-1", kind="photo")
    _add_file(client, auth, pet, storage_id="blob-2", kind="photo")

    assert first.status_code == 201
    assert first.json()["visibility"] == "public"
    assert first.json()["url"].endswith("/blob-1")
    detail = client.get(f"{PETS}/{pet['id']}", headers=auth("u1")).json()
    assert detail["primary_photo_storage_id"] == "blob-1"


def test_document_requires_doc_type(client, auth, create_pet):
    pet = create_pet("u1")

    missing = _add_file(client, auth, pet, storage_id="doc-1", kind="document")
    photo_with_type = _add_file(client, auth, pet, storage_id="p-1", kind="photo", doc_type="rabies")

    assert missing.status_code == 400
    assert photo_with_type.status_code == 400


def test_private_files_are_listed_only_on_request(client, auth, create_pet):
    pet = create_pet("u1")
    _add_file(client, auth, pet, storage_id="photo-1", kind="photo")
    _add_file(client, auth, pet, storage_id="doc-1", kind="document", doc_type="insurance")
    url = f"{PETS}/{pet['id']}"

    default = client.get(f"{url}/files", headers=auth("u1")).json()
    everything = client.get(f"{url}/files", params={"include_private": True}, headers=auth("u1")).json()
    documents = client.get(f"{url}/documents", headers=auth("u1")).json()

    assert [f["storage_id"] for f in default] == ["photo-1"]
    assert {f["storage_id"] for f in everything} == {"photo-1", "doc-1"}
    assert [f["storage_id"] for f in documents] == ["doc-1"]


def test_set_primary_photo(client, auth, create_pet):
    pet = create_pet("u1")
    _add_file(client, auth, pet, storage_id="photo-1", kind="photo")
    second = _add_file(client, auth, pet, storage_id="photo-2", kind="photo").json()
    doc = _add_file(client, auth, pet, storage_id="doc-1", kind="document", doc_type="other").json()
    url = f"{PETS}/{pet['id']}/primary-photo"

    response = client.put(url, json={"file_id": second["id"]}, headers=auth("u1"))
    assert response.json()["primary_photo_storage_id"] == "photo-2"

    assert client.put(url, json={"file_id": doc["id"]}, headers=auth("u1")).status_code == 400


def test_removing_primary_photo_promotes_next(client, auth, create_pet):
    pet = create_pet("u1")
    first = _add_file(client, auth, pet, storage_id="photo-1", kind="photo").json()
    _add_file(client, auth, pet, storage_id="photo-2", kind="photo")

    response = client.delete(f"{PETS}/{pet['id']}/files/{first['id']}", headers=auth("u1"))

    assert response.json() == {"success": True}
    detail = client.get(f"{PETS}/{pet['id']}", headers=auth("u1")).json()
    assert detail["primary_photo_storage_id"] == "photo-2"


def test_file_of_other_pet_cannot_be_removed(client, auth, create_pet):
    pet = create_pet("u1")
    other = create_pet("u1", name="Other")
    pet_file = _add_file(client, auth, other, storage_id="photo-1", kind="photo").json()

    response = client.delete(f"{PETS}/{pet['id']}/files/{pet_file['id']}", headers=auth("u1"))

    assert response.status_code == 400


def test_update_visibility_permissions(client, auth, create_pet):
    pet = create_pet("u1")
    client.post(f"{PETS}/{pet['id']}/members", json={"user_id": "v1", "role": "viewer"}, headers=auth("u1"))
    pet_file = _add_file(client, auth, pet, storage_id="doc-1", kind="document", doc_type="rabies").json()
    assert pet_file["visibility"] == "private"
    url = f"{FILES}/{pet_file['id']}/visibility"

    stranger = client.patch(url, json={"visibility": "public"}, headers=auth("u9"))
    viewer = client.patch(url, json={"visibility": "public"}, headers=auth("v1"))
    owner = client.patch(url, json={"visibility": "public"}, headers=auth("u1"))

    assert stranger.status_code == 404
    assert stranger.json()["message"] == "File association not found"
    assert viewer.status_code == 403
    assert owner.json()["visibility"] == "public"
