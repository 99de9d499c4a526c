PETS = "/api/v1/pets"


def _members_url(pet):
    return f"{PETS}/{pet['id']}/members"


def test_share_pet_and_list_members(client, auth, create_pet):
    pet = create_pet("u1")

    response = client.post(_members_url(pet), json={"user_id": "u2", "role": "guardian"}, headers=auth("u1"))
    assert response.status_code == 201
    assert response.json()["role"] == "guardian"

    members = client.get(_members_url(pet), headers=auth("u2")).json()
    assert [m["user_id"] for m in members] == ["u1", "u2"]
    assert [m["is_primary_owner"] for m in members] == [True, False]


def test_duplicate_member_is_rejected(client, auth, create_pet):
    pet = create_pet("u1")
    client.post(_members_url(pet), json={"user_id": "u2", "role": "viewer"}, headers=auth("u1"))

    response = client.post(_members_url(pet), json={"user_id": "u2", "role": "guardian"}, headers=auth("u1"))

    assert response.status_code == 409
    assert response.json()["code"] == "DUPLICATE"


def test_primary_owner_cannot_be_added_as_member(client, auth, create_pet):
    pet = create_pet("u1")

    response = client.post(_members_url(pet), json={"user_id": "u1", "role": "viewer"}, headers=auth("u1"))

    assert response.status_code == 409
    assert response.json()["code"] == "INVALID_OPERATION"


def test_viewer_cannot_manage_members(client, auth, create_pet):
    pet = create_pet("u1")
    client.post(_members_url(pet), json={"user_id": "v1", "role": "viewer"}, headers=auth("u1"))

    response = client.post(_members_url(pet), json={"user_id": "u3", "role": "viewer"}, headers=auth("v1"))

    assert response.status_code == 403


def test_guardian_can_share(client, auth, create_pet):
    pet = create_pet("u1")
    client.post(_members_url(pet), json={"user_id": "g1", "role": "guardian"}, headers=auth("u1"))

    response = client.post(_members_url(pet), json={"user_id": "u3", "role": "viewer"}, headers=auth("g1"))

    assert response.status_code == 201


def test_change_member_role(client, auth, create_pet):
    pet = create_pet("u1")
    client.post(_members_url(pet), json={"user_id": "u2", "role": "viewer"}, headers=auth("u1"))
    url = f"{PETS}/{pet['id']}"

    assert client.patch(url, json={"handling_notes": "x"}, headers=auth("u2")).status_code == 403

    response = client.patch(f"{_members_url(pet)}/u2", json={"role": "guardian"}, headers=auth("u1"))
    assert response.json()["role"] == "guardian"
    assert client.patch(url, json={"handling_notes": "x"}, headers=auth("u2")).status_code == 200

    missing = client.patch(f"{_members_url(pet)}/nobody", json={"role": "viewer"}, headers=auth("u1"))
    assert missing.status_code == 404


def test_remove_member_revokes_access(client, auth, create_pet):
    pet = create_pet("u1")
    client.post(_members_url(pet), json={"user_id": "u2", "role": "guardian"}, headers=auth("u1"))

    response = client.delete(f"{_members_url(pet)}/u2", headers=auth("u1"))

    assert response.json() == {"success": True}
    assert client.get(f"{PETS}/{pet['id']}", headers=auth("u2")).status_code == 404
    assert client.delete(f"{_members_url(pet)}/u2", headers=auth("u1")).status_code == 404


def test_primary_owner_cannot_be_removed(client, auth, create_pet):
    pet = create_pet("u1")
    client.post(_members_url(pet), json={"user_id": "g1", "role": "guardian"}, headers=auth("u1"))

    response = client.delete(f"{_members_url(pet)}/u1", headers=auth("g1"))

    assert response.status_code == 409
    assert response.json()["code"] == "INVALID_OPERATION"


def test_invalid_role_is_rejected(client, auth, create_pet):
    pet = create_pet("u1")

    response = client.post(_members_url(pet), json={"user_id": "u2", "role": "admin"}, headers=auth("u1"))

    assert response.status_code == 422


def test_concurrent_add_reports_duplicate(client, auth, create_pet, monkeypatch):
    from petcare.api.v1.routes import members

    pet = create_pet("u1")
    client.post(_members_url(pet), json={"user_id": "u2", "role": "viewer"}, headers=auth("u1"))
    # The lookup misses the row a racing request already inserted.
    monkeypatch.setattr(members, "find_member", lambda db, pet_id, user_id: None)

    response = client.post(_members_url(pet), json={"user_id": "u2", "role": "guardian"}, headers=auth("u1"))

    assert response.status_code == 409
    assert response.json() == {"code": "DUPLICATE", "message": "User is already a member of this pet"}
    roles = [m["role"] for m in client.get(_members_url(pet), headers=auth("u1")).json()]
    assert roles == ["owner", "viewer"]
