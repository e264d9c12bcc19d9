"""
Catalog Router

Public lookup lists:
- GET /posts
- GET /districts
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobportal.core.database import get_db
from jobportal.modules.catalog import repository
from jobportal.modules.catalog.schemas import DistrictResponse, PostResponse

router = APIRouter()


@router.get("/posts", response_model=list[PostResponse], summary="List Posts")
async def list_posts(db: AsyncSession = Depends(get_db)) -> list[PostResponse]:
    """Posts an applicant can apply for."""
    posts = await repository.list_posts(db)
    return [PostResponse.model_validate(post) for post in posts]


@router.get("/districts", response_model=list[DistrictResponse], summary="List Districts")
async def list_districts(db: AsyncSession = Depends(get_db)) -> list[DistrictResponse]:
    districts = await repository.list_districts(db)
    return [DistrictResponse.model_validate(district) for district in districts]
