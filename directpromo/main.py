from __future__ import annotations
import json
import os
import uuid
from typing import Any, Optional

import structlog
from fastapi import Body, Depends, FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from directpromo.cart import Cart, line_item_from_product
from directpromo.catalog import CATEGORIES, PRODUCTS, get_category_info, get_product, list_products
from directpromo.errors import CartNotFoundError, MailDeliveryError
from directpromo.logging_config import configure_logging
from directpromo.mailer import LogoAttachment, Mailer, SmtpMailer
from directpromo.schemas import (
    AddItemIn,
    CartCreated,
    CartOut,
    CategoryInfo,
    CategoryOut,
    Product,
    SizeQuantity,
    SubmissionOut,
    UpdateQuantityIn,
)
from directpromo.settings import Settings, get_settings
from directpromo.store import CartStore, get_store
from directpromo.validation import (
    build_contact_message,
    build_order_payload,
    sanitize_input,
    validate_contact,
    validate_order,
)

configure_logging(get_settings().LOG_LEVEL)
logger = structlog.get_logger()

app = FastAPI(title="DirectPromo API")

# The storefront posts from its own origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_mailer(settings: Settings = Depends(get_settings)) -> Mailer:
    return SmtpMailer(settings)


def failure(status_code: int, error: str, details: Optional[list[str]] = None) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "error": error}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@app.get("/")
async def root():
    return {"message": "DirectPromo Backend Running"}


@app.get("/test")
async def test():
    return {"ok": True, "products": len(PRODUCTS)}


# Catalog
@app.get("/products", response_model=list[Product])
async def get_products(category: Optional[str] = Query(None), q: Optional[str] = Query(None)):
    return list_products(category=category, q=q)


@app.get("/products/{product_id}", response_model=Product)
async def get_one_product(product_id: str):
    product = get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@app.get("/categories", response_model=list[CategoryInfo])
async def get_categories():
    return list(CATEGORIES.values())


@app.get("/categories/{category}", response_model=CategoryOut)
async def get_category(category: str):
    info = get_category_info(category)
    return CategoryOut(**info.model_dump(), products=list_products(category=category))


# Cart
def load_cart(cart_id: str, store: CartStore = Depends(get_store)) -> Cart:
    try:
        return store.get(cart_id)
    except CartNotFoundError:
        raise HTTPException(status_code=404, detail="Cart not found")


def cart_out(cart_id: str, cart: Cart) -> CartOut:
    return CartOut(
        id=cart_id,
        items=list(cart.items),
        total_items=cart.get_total_items(),
        total_price=round(cart.get_total_price(), 2),
    )


@app.post("/cart", response_model=CartCreated)
def create_cart(store: CartStore = Depends(get_store)):
    return CartCreated(id=store.create())


@app.get("/cart/{cart_id}", response_model=CartOut)
def get_cart(cart_id: str, cart: Cart = Depends(load_cart)):
    return cart_out(cart_id, cart)


@app.post("/cart/{cart_id}/items", response_model=CartOut)
def add_item(cart_id: str, payload: AddItemIn, cart: Cart = Depends(load_cart)):
    product = get_product(payload.product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    if payload.selected_color not in product.colors:
        raise HTTPException(status_code=400, detail=f"Color not available: {payload.selected_color}")
    unknown = [sq.size for sq in payload.size_breakdown if sq.size not in product.sizes]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Size not available: {', '.join(unknown)}")

    # Repeated sizes are summed; the product page only submits sizes that were picked
    picked: dict[str, int] = {}
    for sq in payload.size_breakdown:
        picked[sq.size] = picked.get(sq.size, 0) + sq.quantity
    sizes = [SizeQuantity(size=size, quantity=quantity) for size, quantity in picked.items() if quantity > 0]
    total = sum(sq.quantity for sq in sizes)
    if total < product.min_order:
        raise HTTPException(status_code=400, detail=f"Minimum order quantity is {product.min_order} units")

    cart.add_to_cart(line_item_from_product(product, payload.selected_color, sizes))
    logger.info("cart_item_added", cart_id=cart_id, product_id=product.id, color=payload.selected_color, quantity=total)
    return cart_out(cart_id, cart)


@app.patch("/cart/{cart_id}/items", response_model=CartOut)
def update_item(cart_id: str, payload: UpdateQuantityIn, cart: Cart = Depends(load_cart)):
    cart.update_quantity(payload.product_id, payload.color, payload.size, payload.quantity)
    return cart_out(cart_id, cart)


@app.delete("/cart/{cart_id}/items/{product_id}/{color}", response_model=CartOut)
def remove_item(cart_id: str, product_id: str, color: str, cart: Cart = Depends(load_cart)):
    cart.remove_from_cart(product_id, color)
    return cart_out(cart_id, cart)


@app.delete("/cart/{cart_id}", response_model=CartOut)
def clear_cart(cart_id: str, cart: Cart = Depends(load_cart)):
    cart.clear_cart()
    return cart_out(cart_id, cart)


# Order submission
def submit(payload: Any, mailer: Mailer, store: CartStore, logo: Optional[LogoAttachment] = None):
    result = validate_order(payload)
    if not result.valid:
        logger.info("order_validation_failed", errors=result.errors)
        return failure(400, "Validation failed", result.errors)

    order = build_order_payload(payload)
    try:
        mailer.send_order_notification(order, logo)
    except MailDeliveryError as e:
        logger.error("order_notification_failed", error=str(e))
        return failure(500, "Failed to send order notification")

    # The session cart is done once its order has been sent
    cart_id = payload.get("cartId")
    if isinstance(cart_id, str) and cart_id:
        store.discard(cart_id)

    order_id = uuid.uuid4().hex[:12]
    logger.info("order_submitted", order_id=order_id, items=len(order.cart_items), company=order.company)
    return SubmissionOut(success=True, message="Order submitted successfully", order_id=order_id)


@app.post("/submit-order", response_model=SubmissionOut)
def submit_order(payload: Any = Body(...), mailer: Mailer = Depends(get_mailer), store: CartStore = Depends(get_store)):
    return submit(payload, mailer, store)


def parse_json_field(raw: Optional[str], label: str) -> Any:
    if not raw:
        raise HTTPException(status_code=400, detail=f"Missing or invalid {label}")
    try:
        return json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label}")


@app.post("/submit-order/form", response_model=SubmissionOut)
def submit_order_form(
    contact_info: Optional[str] = Form(None, alias="contactInfo"),
    order_details: Optional[str] = Form(None, alias="orderDetails"),
    logo: Optional[UploadFile] = File(None),
    mailer: Mailer = Depends(get_mailer),
    store: CartStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    contact = parse_json_field(contact_info, "contact information")
    if not isinstance(contact, dict):
        raise HTTPException(status_code=400, detail="Invalid contact information")
    cart_items = parse_json_field(order_details, "order details")

    attachment = None
    # Non-image uploads are ignored, as the storefront only offers image logos
    if logo is not None and (logo.content_type or "").startswith("image/"):
        data = logo.file.read(settings.MAX_LOGO_BYTES + 1)
        if len(data) > settings.MAX_LOGO_BYTES:
            return failure(413, f"The uploaded file is too large. Please upload a file smaller than {settings.MAX_LOGO_BYTES // (1024 * 1024)}MB.")
        attachment = LogoAttachment(
            filename=sanitize_input(logo.filename) or "company-logo",
            content_type=logo.content_type,
            data=data,
        )

    return submit({**contact, "cartItems": cart_items}, mailer, store, attachment)


# Contact form
@app.post("/contact", response_model=SubmissionOut)
def contact(payload: Any = Body(...), mailer: Mailer = Depends(get_mailer)):
    result = validate_contact(payload)
    if not result.valid:
        return failure(400, result.errors[0])

    message = build_contact_message(payload)
    try:
        mailer.send_contact_notification(message)
    except MailDeliveryError as e:
        logger.error("contact_notification_failed", error=str(e))
        return failure(500, "Failed to send message")

    logger.info("contact_submitted", company=message.company)
    return SubmissionOut(success=True, message="Message sent successfully")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", get_settings().PORT)))
