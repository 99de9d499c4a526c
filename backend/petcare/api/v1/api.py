"""Module: api."""

# backend/petcare/api/v1/api.py
from fastapi import APIRouter

# Operational routes.
from petcare.api.v1.routes.health import router as health_router

# Pet profile and its sub-resources.
from petcare.api.v1.routes.pets import router as pets_router
from petcare.api.v1.routes.members import router as members_router
from petcare.api.v1.routes.contacts import router as contacts_router
from petcare.api.v1.routes.files import router as pet_files_router
from petcare.api.v1.routes.files import file_router
from petcare.api.v1.routes.vaccines import router as pet_vaccines_router
from petcare.api.v1.routes.vaccines import record_router as vaccines_router

# Platform administration.
from petcare.api.v1.routes.admin import router as admin_router


api_router = APIRouter()

# Register operational endpoints first for service-level concerns.
api_router.include_router(health_router, prefix="/health", tags=["health"])

# Register business/domain endpoints consumed by the application UI.
api_router.include_router(pets_router, prefix="/pets", tags=["pets"])
api_router.include_router(members_router, prefix="/pets", tags=["members"])
api_router.include_router(contacts_router, prefix="/pets", tags=["contacts"])
api_router.include_router(pet_files_router, prefix="/pets", tags=["files"])
api_router.include_router(file_router, prefix="/files", tags=["files"])
api_router.include_router(pet_vaccines_router, prefix="/pets", tags=["vaccines"])
api_router.include_router(vaccines_router, prefix="/vaccines", tags=["vaccines"])
api_router.include_router(admin_router, prefix="/admin", tags=["admin"])
