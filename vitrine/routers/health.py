import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vitrine.config import get_settings
from vitrine.database.session import get_db

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


def _store_reachable(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Health check could not reach the store: %s", exc)
        return False
    return True


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    settings = get_settings()
    store_ok = _store_reachable(db)
    payload = {
        "status": "ok" if store_ok else "degraded",
        "store": settings.STORE_NAME,
        "database": "ok" if store_ok else "unavailable",
        "environment": settings.ENVIRONMENT,
        "time": datetime.now(timezone.utc).isoformat(),
    }
    return JSONResponse(payload, status_code=200 if store_ok else 503)
