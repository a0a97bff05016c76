import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse

from vitrine.config import get_settings
from vitrine.core.exceptions import StoreError
from vitrine.dependencies import get_product_repository
from vitrine.repositories.product_repository import ProductRepository
from vitrine.schemas.cart import HandoffRequest, HandoffResponse
from vitrine.schemas.product import Product
from vitrine.services.cart_service import Cart, build_handoff_link
from vitrine.services.catalog_service import load_catalog
from vitrine.services.whatsapp_service import build_whatsapp_link, format_display_phone

router = APIRouter(tags=["Storefront"])
logger = logging.getLogger(__name__)


@router.get("/", response_class=HTMLResponse)
def home_page(request: Request, repository: ProductRepository = Depends(get_product_repository)):
    settings = get_settings()
    load_error = False
    try:
        products = load_catalog(repository)
    except StoreError:
        logger.exception("Catalog could not be loaded")
        products = []
        load_error = True

    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "home.html",
        {
            "products": products,
            "load_error": load_error,
            "contact_link": build_whatsapp_link(),
            "contact_phone": format_display_phone(settings.WHATSAPP_NUMBER),
        },
    )


@router.get("/api/catalog", response_model=list[Product])
def catalog(repository: ProductRepository = Depends(get_product_repository)):
    try:
        return load_catalog(repository)
    except StoreError as exc:
        raise HTTPException(status_code=502, detail="Catalog is unavailable.") from exc


@router.post("/api/cart/handoff", response_model=HandoffResponse)
def cart_handoff(payload: HandoffRequest):
    cart = Cart()
    for item in payload.items:
        if not cart.is_in_cart(item.id):
            cart.add(item)
    if not len(cart):
        raise HTTPException(status_code=400, detail="cart is empty")

    try:
        message, url = build_handoff_link(cart.items)
    except (RuntimeError, ValueError) as exc:
        logger.error("WhatsApp handoff link could not be built: %s", exc)
        raise HTTPException(status_code=500, detail="Handoff is not configured.") from exc

    return HandoffResponse(count=len(cart), message=message, url=url)
