from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import RedirectResponse

from vitrine.config import get_settings
from vitrine.core.constants import LOGIN_PATH

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


def admin_auth_configured() -> bool:
    settings = get_settings()
    return bool(settings.ADMIN_EMAIL and (settings.ADMIN_PASSWORD or settings.ADMIN_PASSWORD_HASH))


def hash_password(password: str, salt: str, rounds: int) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        rounds,
    )
    return digest.hex()


def verify_admin_credentials(email: str, password: str) -> bool:
    settings = get_settings()
    if not admin_auth_configured():
        logger.warning("Admin login attempted but ADMIN_EMAIL / password are not configured.")
        return False

    email = (email or "").strip()
    password = password or ""

    expected_email = settings.ADMIN_EMAIL.strip()
    if not hmac.compare_digest(email.casefold().encode("utf-8"), expected_email.casefold().encode("utf-8")):
        return False

    if settings.ADMIN_PASSWORD_HASH:
        if not settings.ADMIN_PASSWORD_SALT:
            logger.error("ADMIN_PASSWORD_HASH is set without ADMIN_PASSWORD_SALT.")
            return False
        computed = hash_password(
            password,
            settings.ADMIN_PASSWORD_SALT,
            settings.ADMIN_PBKDF2_ROUNDS,
        )
        return hmac.compare_digest(computed, settings.ADMIN_PASSWORD_HASH.strip().lower())

    if settings.ADMIN_PASSWORD:
        return hmac.compare_digest(password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))

    return False


def current_user(request: Request) -> Optional[str]:
    return request.session.get(SESSION_USER_KEY)


def redirect_if_unauthenticated(request: Request) -> Optional[RedirectResponse]:
    if current_user(request):
        return None
    return RedirectResponse(url=LOGIN_PATH, status_code=303)


def require_login_api(request: Request) -> None:
    if current_user(request):
        return
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
