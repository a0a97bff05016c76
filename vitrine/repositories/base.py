import logging
from contextlib import contextmanager

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vitrine.core.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)


@contextmanager
def store_errors(db: Session, action: str):
    """Translate backend failures raised inside the block into ``StoreError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Store operation failed (%s): %s", action, exc)
        raise StoreError("{} failed".format(action)) from exc


def validate_fields(schema, fields):
    if isinstance(fields, schema):
        return fields
    try:
        return schema.model_validate(dict(fields))
    except PydanticValidationError as exc:
        raise ValidationError(str(exc)) from exc


def to_record(schema, document, collection: str):
    try:
        return schema.model_validate(document)
    except PydanticValidationError as exc:
        logger.error("Malformed %s document %s: %s", collection, getattr(document, "id", "?"), exc)
        raise StoreError("malformed {} document".format(collection)) from exc
