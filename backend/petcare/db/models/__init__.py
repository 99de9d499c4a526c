# backend/petcare/db/models/__init__.py

from petcare.db.models.pet import Pet
from petcare.db.models.pet_member import PetMember
from petcare.db.models.pet_file import PetFile
from petcare.db.models.vaccine_record import VaccineRecord

from petcare.db.models.platform_owner import PlatformOwner
