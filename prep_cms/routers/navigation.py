from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from prep_cms.database import get_db
from prep_cms.schemas.navigation import NavigationResponse
from prep_cms.services.navigation import build_navigation


router = APIRouter(tags=["navigation"])


@router.get("/navigation", response_model=NavigationResponse)
def get_navigation(
    include_shelved: bool = Query(default=False),
    db: Session = Depends(get_db),
) -> NavigationResponse:
    return NavigationResponse(subjects=build_navigation(db, include_shelved=include_shelved))
