import logging
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.responses import HTMLResponse, RedirectResponse

from vitrine.config import get_settings
from vitrine.core.admin_auth import current_user, redirect_if_unauthenticated, require_login_api
from vitrine.core.constants import ADMIN_PATH
from vitrine.core.currency import format_from_digits
from vitrine.core.exceptions import DocumentNotFound, StoreError
from vitrine.dependencies import get_workspace
from vitrine.services.admin_service import AdminViewState, build_admin_view
from vitrine.services.inventory_workflow import MSG_INVALID_IMAGE, AdminWorkspace, ImageUpload, Notification

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger(__name__)

FLASH_KEY = "flash"
MSG_LOAD_ERROR = "Erro ao carregar dados."
MSG_NOT_FOUND = "Produto não encontrado."


def _flash(request: Request, notification: Notification) -> None:
    request.session[FLASH_KEY] = notification.as_dict()


def _pop_flash(request: Request) -> Optional[dict]:
    return request.session.pop(FLASH_KEY, None)


def _redirect_back(state: AdminViewState) -> RedirectResponse:
    return RedirectResponse(url="{}?{}".format(ADMIN_PATH, urlencode(state.as_query())), status_code=303)


def _form_state(tab, q, sort) -> AdminViewState:
    return AdminViewState.from_query(search=q, tab=tab, sort=sort)


def _load_product(request: Request, workspace: AdminWorkspace, product_id: str):
    try:
        product = workspace.product_repository.get(product_id)
    except DocumentNotFound:
        _flash(request, Notification.error(MSG_NOT_FOUND))
        return None
    except StoreError:
        logger.exception("Could not load product %s", product_id)
        _flash(request, Notification.error(MSG_LOAD_ERROR))
        return None
    workspace.products = [product]
    return product


@router.get("", response_class=HTMLResponse)
def admin_page(
    request: Request,
    q: Optional[str] = Query(None, description="Product name search"),
    tab: Optional[str] = Query(None, description="catalog | inventory | sales"),
    sort: Optional[str] = Query(None, description="name | stock_asc | stock_desc"),
    edit: Optional[str] = Query(None, description="Product id to edit, or 'new'"),
    workspace: AdminWorkspace = Depends(get_workspace),
):
    redirect = redirect_if_unauthenticated(request)
    if redirect:
        return redirect

    state = AdminViewState.from_query(search=q, tab=tab, sort=sort)
    notification = _pop_flash(request)
    try:
        workspace.load()
    except StoreError:
        logger.exception("Admin dashboard could not load products or sales")
        notification = Notification.error(MSG_LOAD_ERROR).as_dict()

    product_to_edit = None
    if edit and edit != "new":
        product_to_edit = workspace.find(edit)

    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "admin.html",
        {
            "view": build_admin_view(workspace.products, workspace.sales, state, get_settings().STORE_TIMEZONE),
            "state": state,
            "query": state.as_query(),
            "notification": notification,
            "notification_ttl_ms": get_settings().NOTIFICATION_TTL_MS,
            "form_open": bool(edit),
            "product_to_edit": product_to_edit,
            "user": current_user(request),
        },
    )


@router.get("/api/overview")
def admin_overview(
    request: Request,
    q: Optional[str] = Query(None),
    tab: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    workspace: AdminWorkspace = Depends(get_workspace),
):
    require_login_api(request)
    state = AdminViewState.from_query(search=q, tab=tab, sort=sort)
    try:
        workspace.load()
    except StoreError as exc:
        raise HTTPException(status_code=502, detail="Store is unavailable.") from exc
    view = build_admin_view(workspace.products, workspace.sales, state, get_settings().STORE_TIMEZONE)
    return jsonable_encoder(view)


@router.get("/api/price-preview")
def price_preview(request: Request, digits: str = Query("", description="Digits typed so far")):
    require_login_api(request)
    return {"price": format_from_digits(digits)}


@router.post("/products")
def save_product(
    request: Request,
    name: str = Form(""),
    price: str = Form(""),
    product_id: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    tab: Optional[str] = Form(None),
    q: Optional[str] = Form(None),
    sort: Optional[str] = Form(None),
    workspace: AdminWorkspace = Depends(get_workspace),
):
    redirect = redirect_if_unauthenticated(request)
    if redirect:
        return redirect

    state = _form_state(tab, q, sort)
    upload = None
    if image is not None and image.filename:
        max_bytes = get_settings().MAX_UPLOAD_BYTES
        data = image.file.read(max_bytes + 1)
        if len(data) > max_bytes:
            logger.info("Rejected product image %r: larger than %d bytes", image.filename, max_bytes)
            _flash(request, Notification.error(MSG_INVALID_IMAGE))
            return _redirect_back(state)
        upload = ImageUpload(filename=image.filename, data=data)

    notification = workspace.create_or_update_product(
        {"name": name, "price": price},
        existing_id=product_id or None,
        upload=upload,
    )
    _flash(request, notification)
    return _redirect_back(state)


@router.post("/products/{product_id}/stock")
def update_stock(
    request: Request,
    product_id: str,
    delta: int = Form(...),
    tab: Optional[str] = Form(None),
    q: Optional[str] = Form(None),
    sort: Optional[str] = Form(None),
    workspace: AdminWorkspace = Depends(get_workspace),
):
    redirect = redirect_if_unauthenticated(request)
    if redirect:
        return redirect

    product = _load_product(request, workspace, product_id)
    if product is not None:
        notification = workspace.adjust_stock(product, delta)
        if not notification.ok:
            _flash(request, notification)
    return _redirect_back(_form_state(tab, q, sort))


@router.post("/products/{product_id}/sale")
def register_sale(
    request: Request,
    product_id: str,
    tab: Optional[str] = Form(None),
    q: Optional[str] = Form(None),
    sort: Optional[str] = Form(None),
    workspace: AdminWorkspace = Depends(get_workspace),
):
    redirect = redirect_if_unauthenticated(request)
    if redirect:
        return redirect

    product = _load_product(request, workspace, product_id)
    if product is not None:
        _flash(request, workspace.register_sale(product))
    return _redirect_back(_form_state(tab, q, sort))


@router.post("/products/{product_id}/showcase")
def toggle_showcase(
    request: Request,
    product_id: str,
    tab: Optional[str] = Form(None),
    q: Optional[str] = Form(None),
    sort: Optional[str] = Form(None),
    workspace: AdminWorkspace = Depends(get_workspace),
):
    redirect = redirect_if_unauthenticated(request)
    if redirect:
        return redirect

    product = _load_product(request, workspace, product_id)
    if product is not None:
        _flash(request, workspace.toggle_showcase(product))
    return _redirect_back(_form_state(tab, q, sort))


@router.get("/products/{product_id}/delete", response_class=HTMLResponse)
def confirm_delete(
    request: Request,
    product_id: str,
    tab: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    workspace: AdminWorkspace = Depends(get_workspace),
):
    redirect = redirect_if_unauthenticated(request)
    if redirect:
        return redirect

    state = _form_state(tab, q, sort)
    product = _load_product(request, workspace, product_id)
    if product is None:
        return _redirect_back(state)

    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "confirm_delete.html",
        {"product": product, "state": state, "query": state.as_query()},
    )


@router.post("/products/{product_id}/delete")
def delete_product(
    request: Request,
    product_id: str,
    tab: Optional[str] = Form(None),
    q: Optional[str] = Form(None),
    sort: Optional[str] = Form(None),
    workspace: AdminWorkspace = Depends(get_workspace),
):
    redirect = redirect_if_unauthenticated(request)
    if redirect:
        return redirect

    _flash(request, workspace.delete_product(product_id))
    return _redirect_back(_form_state(tab, q, sort))
