# preferences.py
from typing import Any

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import Session

from prep_cms.database import get_db
from prep_cms.schemas.common import SuccessResponse
from prep_cms.schemas.preferences import ClientPreferencesResponse, ClientPreferencesUpdate
from prep_cms.services.preferences_service import (
    get_preferences,
    merge_preferences,
    reset_preferences,
    save_preferences,
)
from prep_cms.services.validation import validate_form


router = APIRouter(prefix="/preferences", tags=["preferences"])

CLIENT_ID_PATTERN = r"^[A-Za-z0-9_.:-]+$"


@router.get("/{client_id}", response_model=ClientPreferencesResponse)
def read_preferences(
    client_id: str = Path(..., max_length=64, pattern=CLIENT_ID_PATTERN),
    db: Session = Depends(get_db),
) -> ClientPreferencesResponse:
    return ClientPreferencesResponse(client_id=client_id, preferences=get_preferences(db, client_id))


@router.put("/{client_id}", response_model=ClientPreferencesResponse)
def update_preferences(
    payload: dict[str, Any] = Body(...),
    client_id: str = Path(..., max_length=64, pattern=CLIENT_ID_PATTERN),
    db: Session = Depends(get_db),
) -> ClientPreferencesResponse:
    update = validate_form(ClientPreferencesUpdate, payload)
    merged = merge_preferences(get_preferences(db, client_id), update)
    saved = save_preferences(db, client_id, merged)
    return ClientPreferencesResponse(client_id=client_id, preferences=saved)


@router.delete("/{client_id}", response_model=SuccessResponse)
def delete_preferences(
    client_id: str = Path(..., max_length=64, pattern=CLIENT_ID_PATTERN),
    db: Session = Depends(get_db),
) -> SuccessResponse:
    reset_preferences(db, client_id)
    return SuccessResponse()
