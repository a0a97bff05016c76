import logging
import secrets
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.sessions import SessionMiddleware

from vitrine.config import Settings, get_settings
from vitrine.core.constants import STATIC_DIR, TEMPLATES_DIR
from vitrine.core.currency import format_amount
from vitrine.core.logging import setup_logging
from vitrine.database import init_db
from vitrine.routers import admin_router, auth_router, health_router, storefront_router
from vitrine.services.blob_storage import media_root

setup_logging()
settings: Settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    media_root().mkdir(parents=True, exist_ok=True)
    logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield


def _build_templates() -> Jinja2Templates:
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["brl"] = format_amount
    templates.env.globals["settings"] = settings
    return templates


if not settings.SESSION_SECRET:
    logger.warning("SESSION_SECRET is not set; admin sessions will not survive a restart.")

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
app.state.templates = _build_templates()
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET or secrets.token_urlsafe(32),
    session_cookie=settings.SESSION_COOKIE,
    same_site="lax",
    https_only=settings.ENVIRONMENT.lower() != "local",
)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.mount("/media", StaticFiles(directory=str(media_root()), check_dir=False), name="media")

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(storefront_router)


__all__ = ["app"]
