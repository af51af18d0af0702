# preferences_service.py
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from prep_cms.errors import QueryError
from prep_cms.models.preferences import ClientPreferencesModel
from prep_cms.schemas.preferences import ClientPreferences, ClientPreferencesUpdate
from prep_cms.services.validation import validate_form


logger = logging.getLogger(__name__)


def build_preferences(raw: dict[str, Any] | ClientPreferences | None) -> ClientPreferences:
    if isinstance(raw, ClientPreferences):
        return raw
    if not raw:
        return ClientPreferences()
    return ClientPreferences(**raw)


def _find(db: Session, client_id: str) -> ClientPreferencesModel | None:
    return db.query(ClientPreferencesModel).filter(ClientPreferencesModel.client_id == client_id).first()


def get_preferences(db: Session, client_id: str) -> ClientPreferences:
    try:
        record = _find(db, client_id)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Error fetching preferences for client %s: %s", client_id, exc, exc_info=True)
        raise QueryError("Failed to load preferences") from exc
    if not record:
        return ClientPreferences()
    return build_preferences(record.preferences_data)


def merge_preferences(base: ClientPreferences, update: ClientPreferencesUpdate) -> ClientPreferences:
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    reader_changes = changes.pop("reader", None)
    merged = base.model_dump()
    merged.update(changes)
    if reader_changes:
        merged["reader"] = {**merged["reader"], **reader_changes}
    # Re-validate so ranges and id-list coercion apply to the merged document.
    return validate_form(ClientPreferences, merged)


def save_preferences(db: Session, client_id: str, preferences: ClientPreferences) -> ClientPreferences:
    payload = preferences.model_dump()
    try:
        record = _find(db, client_id)
        if record:
            record.preferences_data = payload
        else:
            record = ClientPreferencesModel(client_id=client_id, preferences_data=payload)
            db.add(record)
        db.commit()
        db.refresh(record)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Error saving preferences for client %s: %s", client_id, exc, exc_info=True)
        raise QueryError("Failed to save preferences") from exc
    logger.info("Saved preferences for client %s", client_id)
    return build_preferences(record.preferences_data)


def reset_preferences(db: Session, client_id: str) -> None:
    try:
        db.query(ClientPreferencesModel).filter(ClientPreferencesModel.client_id == client_id).delete()
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Error resetting preferences for client %s: %s", client_id, exc, exc_info=True)
        raise QueryError("Failed to reset preferences") from exc
    logger.info("Reset preferences for client %s", client_id)
