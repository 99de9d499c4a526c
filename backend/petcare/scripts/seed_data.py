"""Module: seed_data.

Fills a development database with demo pets, shares, files and vaccine
records. Every pet gets its slug from the regular allocator.
"""

import random
import uuid
from datetime import timedelta

from faker import Faker

from petcare.core.logging import configure_logging
from petcare.db.base import utcnow
from petcare.db.init_db import init_db
from petcare.db.models.pet import CONTACT_RELATIONSHIPS, PET_SIZES, Pet, default_share_settings
from petcare.db.models.pet_file import DOCUMENT_TYPES, PetFile
from petcare.db.models.pet_member import PetMember
from petcare.db.models.vaccine_record import VACCINE_TYPES, VaccineRecord
from petcare.db.session import SessionLocal
from petcare.policy.slugs import allocate_slug

fake = Faker()

DOG_BREEDS = ["Labrador", "Beagle", "Kelpie", "Border Collie", "Staffy", "Poodle"]
CAT_BREEDS = ["Domestic Shorthair", "Ragdoll", "Siamese", "Maine Coon", "Burmese"]
COMMON_NAMES = ["Max", "Bella", "Luna", "Charlie", "Coco", "Milo", "Daisy", "Ollie"]


def fake_user_id() -> str:
    return f"user_{uuid.uuid4().hex[:16]}"


def build_contact(relationship: str) -> dict:
    return {
        "name": fake.name(),
        "relationship": relationship,
        "phone": fake.phone_number(),
        "email": fake.email() if random.random() < 0.5 else None,
        "preferred": relationship == "owner",
    }


def seed_pet(session, owner_user_id: str) -> Pet:
    species = random.choice(["dog", "cat", "other"])
    name = random.choice(COMMON_NAMES) if random.random() < 0.6 else fake.first_name()
    now = utcnow()

    share_settings = default_share_settings()
    share_settings["allow_public_profile"] = random.random() < 0.3

    pet = Pet(
        owner_user_id=owner_user_id,
        name=name,
        species=species,
        status=random.choices(["active", "deceased", "archived"], weights=[90, 5, 5])[0],
        slug=allocate_slug(session, name),
        sex=random.choice(["male", "female", "unknown"]),
        breed_primary=random.choice(DOG_BREEDS if species == "dog" else CAT_BREEDS),
        size=random.choice(PET_SIZES),
        weight_lbs=round(random.uniform(5, 90), 1),
        birth_date=fake.date_between(start_date="-15y", end_date="-90d"),
        color_primary=fake.safe_color_name(),
        microchip_id=fake.numerify("9###########") if random.random() < 0.7 else None,
        license={"license_number": None, "issuing_city": None, "expires_at": None},
        temperament_tags=random.sample(["friendly", "shy", "energetic", "calm", "vocal"], k=2),
        good_with={"dogs": random.choice([True, False, None]), "cats": None, "kids": True},
        contacts=[build_contact("owner"), build_contact(random.choice(CONTACT_RELATIONSHIPS))],
        share_settings=share_settings,
        created_at=now,
        updated_at=now,
    )
    session.add(pet)
    # Flush so the next allocation sees this slug.
    session.flush()
    return pet


def seed_children(session, pet: Pet) -> None:
    for _ in range(random.randint(0, 2)):
        session.add(
            PetMember(
                pet_id=pet.pet_id,
                user_id=fake_user_id(),
                role=random.choice(["owner", "guardian", "viewer"]),
            )
        )

    photo_id = f"storage_{uuid.uuid4().hex}"
    session.add(PetFile(pet_id=pet.pet_id, storage_id=photo_id, kind="photo", visibility="public"))
    pet.primary_photo_storage_id = photo_id
    session.add(
        PetFile(
            pet_id=pet.pet_id,
            storage_id=f"storage_{uuid.uuid4().hex}",
            kind="document",
            doc_type=random.choice(DOCUMENT_TYPES),
            visibility="private",
        )
    )

    administered = utcnow() - timedelta(days=random.randint(30, 700))
    session.add(
        VaccineRecord(
            pet_id=pet.pet_id,
            vaccine_type=random.choice(VACCINE_TYPES),
            administered_at=administered,
            expires_at=administered + timedelta(days=365),
            provider_name=f"{fake.last_name()} Veterinary Clinic",
        )
    )


def seed(owner_count: int = 10, pets_per_owner: int = 3) -> int:
    init_db()
    session = SessionLocal()
    created = 0
    try:
        for _ in range(owner_count):
            owner_user_id = fake_user_id()
            for _ in range(random.randint(1, pets_per_owner)):
                pet = seed_pet(session, owner_user_id)
                seed_children(session, pet)
                created += 1
        session.commit()
    finally:
        session.close()
    return created


if __name__ == "__main__":
    configure_logging()
    print(f"Seeded {seed()} pets.")
