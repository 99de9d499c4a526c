"""Module: admin."""

from fastapi import APIRouter, Depends
from sqlalchemy import distinct, func, select
from sqlalchemy.orm import Session

from petcare.api.v1.routes.deps import get_current_user_id, get_db
from petcare.db.models.pet import PET_STATUSES, Pet
from petcare.db.models.pet_file import PetFile
from petcare.db.models.pet_member import PetMember
from petcare.db.models.platform_owner import PlatformOwner
from petcare.db.models.vaccine_record import VaccineRecord
from petcare.policy.platform import is_platform_owner, require_platform_owner

router = APIRouter()


def _count(db: Session, stmt) -> int:
    return int(db.execute(stmt).scalar_one())


# Endpoint: anonymous callers simply get false.
@router.get("/me", summary="Is the caller a platform owner")
def current_admin_status(
    user_id: str | None = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return {"user_id": user_id, "is_platform_owner": is_platform_owner(db, user_id)}


@router.get("/owners", summary="List platform owners")
def list_platform_owners(
    user_id: str | None = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    require_platform_owner(db, user_id)

    owners = db.execute(select(PlatformOwner).order_by(PlatformOwner.created_at)).scalars().all()
    return [
        {"id": str(o.platform_owner_id), "user_id": o.user_id, "created_at": o.created_at}
        for o in owners
    ]


@router.get("/stats", summary="Platform statistics")
def platform_stats(
    user_id: str | None = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    require_platform_owner(db, user_id)

    by_status = dict(
        db.execute(select(Pet.status, func.count(Pet.pet_id)).group_by(Pet.status)).all()
    )
    pets = {status: int(by_status.get(status, 0)) for status in PET_STATUSES}
    pets["total"] = sum(int(n) for n in by_status.values())

    return {
        "pets": pets,
        "users": {
            "unique_pet_owners": _count(db, select(func.count(distinct(Pet.owner_user_id)))),
            "unique_pet_members": _count(db, select(func.count(distinct(PetMember.user_id)))),
            "platform_owners": _count(db, select(func.count(PlatformOwner.platform_owner_id))),
        },
        "content": {
            "files": _count(db, select(func.count(PetFile.file_id))),
            "vaccine_records": _count(db, select(func.count(VaccineRecord.record_id))),
        },
    }
