from fastapi import APIRouter

from jobportal.modules.applicants import router as applicants_router
from jobportal.modules.auth import router as auth_router
from jobportal.modules.catalog import router as catalog_router
from jobportal.modules.verification import router as verification_router

api_router = APIRouter()

api_router.include_router(verification_router, prefix="/otp", tags=["Verification"])

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

api_router.include_router(catalog_router, tags=["Catalog"])

api_router.include_router(applicants_router, tags=["Application"])
