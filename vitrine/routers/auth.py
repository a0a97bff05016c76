import logging

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from vitrine.core.admin_auth import SESSION_USER_KEY, current_user, verify_admin_credentials
from vitrine.core.constants import ADMIN_PATH, LOGIN_PATH

router = APIRouter(prefix="/admin", tags=["Auth"])
logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Credenciais inválidas. Tente novamente."


@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request):
    if current_user(request):
        return RedirectResponse(url=ADMIN_PATH, status_code=303)
    templates = request.app.state.templates
    return templates.TemplateResponse(request, "login.html", {"error": None, "email": ""})


@router.post("/login", response_class=HTMLResponse)
def login_submit(request: Request, email: str = Form(...), password: str = Form(...)):
    templates = request.app.state.templates

    if verify_admin_credentials(email, password):
        request.session.clear()
        request.session[SESSION_USER_KEY] = email.strip()
        logger.info("Admin login succeeded")
        return RedirectResponse(url=ADMIN_PATH, status_code=303)

    logger.info("Admin login rejected")
    return templates.TemplateResponse(
        request,
        "login.html",
        {"error": INVALID_CREDENTIALS, "email": email},
        status_code=401,
    )


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return RedirectResponse(url=LOGIN_PATH, status_code=303)
