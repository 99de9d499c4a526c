import uuid

import pytest

from petcare.api.v1.routes.deps import require_user
from petcare.core.errors import Unauthenticated
from petcare.db.models.pet_member import PetMember
from petcare.policy.membership import (
    NO_MEMBERSHIP,
    PRIMARY_OWNER,
    Membership,
    can_edit,
    can_view,
    resolve_membership,
)


def test_primary_owner_can_edit_and_view(db, make_pet):
    pet = make_pet(owner_user_id="u1")

    assert resolve_membership(db, pet.pet_id, "u1") == PRIMARY_OWNER
    assert can_edit(db, pet.pet_id, "u1")
    assert can_view(db, pet.pet_id, "u1", allow_public=False)
    assert can_view(db, pet.pet_id, "u1", allow_public=True)


def test_primary_owner_wins_over_stray_member_row(db, make_pet, add_member):
    pet = make_pet(owner_user_id="u1")
    add_member(pet, "u1", "viewer")

    membership = resolve_membership(db, pet.pet_id, "u1")
    assert membership.is_primary_owner
    assert membership.role == "owner"
    assert can_edit(db, pet.pet_id, "u1")


@pytest.mark.parametrize(
    "role, editable",
    [("owner", True), ("guardian", True), ("viewer", False)],
)
def test_member_roles(db, make_pet, add_member, role, editable):
    pet = make_pet(owner_user_id="u1")
    add_member(pet, "u2", role)

    assert resolve_membership(db, pet.pet_id, "u2") == Membership(role=role, is_primary_owner=False)
    assert can_edit(db, pet.pet_id, "u2") is editable
    assert can_view(db, pet.pet_id, "u2") is True


def test_unrelated_user_cannot_view_private_pet(db, make_pet):
    pet = make_pet(owner_user_id="u1", public=False)

    assert resolve_membership(db, pet.pet_id, "u3") == NO_MEMBERSHIP
    assert not can_edit(db, pet.pet_id, "u3")
    assert not can_view(db, pet.pet_id, "u3", allow_public=True)
    assert not can_view(db, pet.pet_id, "u3", allow_public=False)


def test_public_profile_visible_to_anonymous_only_when_allowed(db, make_pet):
    pet = make_pet(owner_user_id="u1", public=True)

    assert can_view(db, pet.pet_id, None, allow_public=True)
    assert not can_view(db, pet.pet_id, None, allow_public=False)
    assert can_view(db, pet.pet_id, "stranger", allow_public=True)
    assert not can_edit(db, pet.pet_id, "stranger")


def test_anonymous_user_has_no_membership(db, make_pet):
    pet = make_pet(owner_user_id="u1")

    assert resolve_membership(db, pet.pet_id, None) == NO_MEMBERSHIP
    assert not can_edit(db, pet.pet_id, None)
    assert not can_view(db, pet.pet_id, None)


def test_missing_pet_resolves_to_none(db):
    missing = uuid.uuid4()

    assert resolve_membership(db, missing, "u1") == NO_MEMBERSHIP
    assert not can_edit(db, missing, "u1")
    assert not can_view(db, missing, "u1", allow_public=True)


def test_guardian_loses_edit_when_membership_removed(db, make_pet, add_member):
    pet = make_pet(owner_user_id="u1")
    member = add_member(pet, "u2", "guardian")
    assert can_edit(db, pet.pet_id, "u2")

    db.delete(member)
    db.commit()

    assert not can_edit(db, pet.pet_id, "u2")
    assert db.query(PetMember).count() == 0


def test_resolve_membership_is_idempotent(db, make_pet, add_member):
    pet = make_pet(owner_user_id="u1")
    add_member(pet, "u2", "viewer")

    for user_id in ("u1", "u2", "u3", None):
        assert resolve_membership(db, pet.pet_id, user_id) == resolve_membership(db, pet.pet_id, user_id)


def test_require_user():
    assert require_user("u1") == "u1"
    with pytest.raises(Unauthenticated):
        require_user(None)
