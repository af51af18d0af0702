from __future__ import annotations

import logging
import math
from typing import Any, Callable, Mapping

from pydantic import BaseModel
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from prep_cms.errors import FormValidationError, NotFoundError, QueryError
from prep_cms.models.content import utcnow
from prep_cms.schemas.common import OptionItem, Page
from prep_cms.schemas.content import ContentForm, canonical_id
from prep_cms.services.revalidation import Revalidator
from prep_cms.services.validation import validate_form, validate_paging


logger = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"


def page_count(count: int | None, page_size: int) -> int:
    if not count:
        return 0
    return math.ceil(count / page_size)


def row_range(page: int, page_size: int) -> tuple[int, int]:
    """Zero-based inclusive row range for a 1-based page."""
    start = (page - 1) * page_size
    return start, start + page_size - 1


def like_pattern(term: str) -> str:
    escaped = (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class EntityRepository:
    """Reads and writes for one level of the subject/topic/subtopic tree.

    Every read excludes soft-deleted rows. Subclasses name the table, the form
    schema and (for child levels) the parent key, and decide how rows are
    enriched for listings and detail views.
    """

    model: Any
    form_schema: type[ContentForm]
    list_item_schema: type[BaseModel]
    label: str = "Item"
    plural: str = "items"

    parent_key: str | None = None
    parent_model: Any = None
    parent_label: str | None = None

    def __init__(self, db: Session, revalidator: Revalidator | None = None):
        self.db = db
        self.revalidator = revalidator or Revalidator()

    # ------------------ paths ------------------

    @property
    def list_path(self) -> str:
        return f"/admin/{self.plural}"

    def detail_path(self, entity_id: str) -> str:
        return f"{self.list_path}/{entity_id}"

    # ------------------ queries ------------------

    def _live(self) -> Query:
        return self.db.query(self.model).filter(self.model.is_deleted.is_(False))

    def _filtered(self, *, search: str = "", show_shelved: bool = False, parent_id: str | None = None) -> Query:
        query = self._live()

        term = (search or "").strip()
        if term:
            pattern = like_pattern(term)
            query = query.filter(
                or_(
                    self.model.name.ilike(pattern, escape=_LIKE_ESCAPE),
                    self.model.description.ilike(pattern, escape=_LIKE_ESCAPE),
                )
            )

        if not show_shelved:
            query = query.filter(self.model.is_shelved.is_(False))

        if parent_id and self.parent_key:
            parent_id = canonical_id(parent_id)
            query = query.filter(getattr(self.model, self.parent_key) == parent_id)

        return query

    def _best_effort(self, what: str, fn: Callable[[], Any], default: Any = None) -> Any:
        # Derived fields must never fail the read they decorate.
        try:
            return fn()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.warning("Enrichment '%s' failed for %s: %s", what, self.label.lower(), exc)
            return default

    def _live_names(self, model: Any, ids: set[str]) -> dict[str, str]:
        ids = {i for i in ids if i}
        if not ids:
            return {}
        rows = (
            self.db.query(model.id, model.name)
            .filter(model.id.in_(ids))
            .filter(model.is_deleted.is_(False))
            .all()
        )
        return {row_id: name for row_id, name in rows}

    def _list_items(self, rows: list[Any]) -> list[BaseModel]:
        return [self.list_item_schema.model_validate(row) for row in rows]

    def _detail(self, row: Any) -> BaseModel:
        return self._list_items([row])[0]

    def list(
        self,
        page: int = 1,
        page_size: int = 10,
        search: str = "",
        show_shelved: bool = False,
        parent_id: str | None = None,
    ) -> Page:
        validate_paging(page, page_size)
        start, _end = row_range(page, page_size)
        query = self._filtered(search=search, show_shelved=show_shelved, parent_id=parent_id)

        try:
            count = query.count()
            rows = (
                query.order_by(self.model.created_at.desc(), self.model.id.desc())
                .offset(start)
                .limit(page_size)
                .all()
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error fetching %s: %s", self.plural, exc, exc_info=True)
            raise QueryError(f"Failed to fetch {self.plural}") from exc

        logger.info(
            "Listed %s page=%s page_size=%s search=%r show_shelved=%s parent_id=%s -> %s/%s",
            self.plural, page, page_size, search, show_shelved, parent_id, len(rows), count,
        )
        return Page[self.list_item_schema](
            data=self._list_items(rows),
            count=count,
            page=page,
            page_size=page_size,
            page_count=page_count(count, page_size),
        )

    def get_row(self, entity_id: str) -> Any:
        entity_id = canonical_id(entity_id)
        try:
            row = self._live().filter(self.model.id == entity_id).first()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error fetching %s %s: %s", self.label.lower(), entity_id, exc, exc_info=True)
            raise QueryError(f"Failed to fetch {self.label.lower()}") from exc
        if row is None:
            logger.warning("%s with id %s not found", self.label, entity_id)
            raise NotFoundError(self.label, entity_id)
        return row

    def get_by_id(self, entity_id: str) -> BaseModel:
        return self._detail(self.get_row(entity_id))

    def options(self, *, active_only: bool = False, parent_id: str | None = None) -> list[BaseModel]:
        """``{id, name}`` pairs for selectors, ordered by name."""
        query = self._live()
        if active_only:
            query = query.filter(self.model.is_active.is_(True))
        if parent_id and self.parent_key:
            query = query.filter(getattr(self.model, self.parent_key) == canonical_id(parent_id))
        try:
            rows = query.order_by(self.model.name.asc()).all()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error fetching %s options: %s", self.label.lower(), exc, exc_info=True)
            raise QueryError(f"Failed to load {self.plural}") from exc
        return self._options(rows)

    def _options(self, rows: list[Any]) -> list[BaseModel]:
        return [OptionItem(id=row.id, name=row.name) for row in rows]

    # ------------------ mutations ------------------

    def _ensure_live_parent(self, form: ContentForm) -> None:
        if not self.parent_key:
            return
        parent_id = getattr(form, self.parent_key)
        try:
            exists = (
                self.db.query(self.parent_model.id)
                .filter(self.parent_model.id == parent_id)
                .filter(self.parent_model.is_deleted.is_(False))
                .first()
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error checking %s %s: %s", (self.parent_label or "").lower(), parent_id, exc, exc_info=True)
            raise QueryError(f"Failed to save {self.label.lower()}") from exc
        if exists is None:
            raise FormValidationError({self.parent_key: [f"{self.parent_label} not found."]})

    def _commit(self, row: Any, *, verb: str) -> Any:
        try:
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to %s %s: %s", verb, self.label.lower(), exc, exc_info=True)
            raise QueryError(f"Failed to {verb} {self.label.lower()}") from exc
        return row

    def create(self, form_data: Mapping[str, Any]) -> Any:
        form = validate_form(self.form_schema, form_data)
        self._ensure_live_parent(form)

        now = utcnow()
        row = self.model(**form.model_dump(), created_at=now, modified_at=now)
        self.db.add(row)
        self._commit(row, verb="create")
        logger.info("Created %s: %s (ID: %s)", self.label.lower(), row.name, row.id)

        self.revalidator.revalidate(self.list_path)
        return row

    def update(self, entity_id: str, form_data: Mapping[str, Any]) -> Any:
        row = self.get_row(entity_id)
        current = {field: getattr(row, field) for field in self.form_schema.model_fields}
        form = validate_form(self.form_schema, form_data, current=current)

        if self.parent_key and getattr(form, self.parent_key) != getattr(row, self.parent_key):
            raise FormValidationError(
                {self.parent_key: [f"{self.parent_label} cannot be changed after creation."]}
            )

        for field, value in form.model_dump().items():
            setattr(row, field, value)
        row.modified_at = utcnow()
        self._commit(row, verb="update")
        logger.info("Updated %s: %s (ID: %s)", self.label.lower(), row.name, row.id)

        self.revalidator.revalidate(self.list_path)
        self.revalidator.revalidate(self.detail_path(row.id))
        return row

    def toggle_shelved(self, entity_id: str, is_shelved: bool) -> Any:
        row = self.get_row(entity_id)
        if bool(row.is_shelved) == bool(is_shelved):
            return row

        row.is_shelved = bool(is_shelved)
        row.modified_at = utcnow()
        self._commit(row, verb="update")
        logger.info("Set %s %s is_shelved=%s", self.label.lower(), entity_id, row.is_shelved)

        self.revalidator.revalidate(self.list_path)
        return row

    def _any_row(self, entity_id: str) -> Any:
        entity_id = canonical_id(entity_id)
        try:
            row = self.db.query(self.model).filter(self.model.id == entity_id).first()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error fetching %s %s: %s", self.label.lower(), entity_id, exc, exc_info=True)
            raise QueryError(f"Failed to delete {self.label.lower()}") from exc
        if row is None:
            logger.warning("%s with id %s not found", self.label, entity_id)
            raise NotFoundError(self.label, entity_id)
        return row

    def soft_delete(self, entity_id: str) -> None:
        row = self._any_row(entity_id)
        if not row.is_deleted:
            row.is_deleted = True
            row.modified_at = utcnow()
            self._commit(row, verb="delete")
            logger.info("Soft-deleted %s: %s (ID: %s)", self.label.lower(), row.name, entity_id)

        self.revalidator.revalidate(self.list_path)

    def hard_delete(self, entity_id: str) -> None:
        row = self._any_row(entity_id)
        name = row.name
        try:
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Error hard deleting %s %s: %s", self.label.lower(), entity_id, exc, exc_info=True)
            raise QueryError(f"Failed to delete {self.label.lower()}") from exc
        logger.info("Hard-deleted %s: %s (ID: %s)", self.label.lower(), name, entity_id)

        self.revalidator.revalidate(self.list_path)
