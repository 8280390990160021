"""Validation and sanitization for order and contact submissions.

Everything here works on raw, untrusted JSON values. Problems are collected
into a list of user-facing messages; nothing raises for malformed input.
"""
from __future__ import annotations
import math
import re
from typing import Any, Mapping

from directpromo.schemas import ContactMessage, OrderPayload, ValidationResult

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[\d\s\-()]{10,}$")


def sanitize_input(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    value = value.strip()
    value = value.replace("<", "").replace(">", "")
    # & first so the entities added below are not escaped twice
    return value.replace("&", "&amp;").replace('"', "&quot;").replace("'", "&#x27;")


def split_name(name: Any) -> tuple[str, str]:
    """Split a combined name on the first space: ``("Mary", "Ann Smith")``."""
    if not isinstance(name, str):
        return "", ""
    first, _, last = name.strip().partition(" ")
    return first, last


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)):
        return False
    # JSON integers beyond float range would overflow the price totals
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def is_valid_email(email: str) -> bool:
    return EMAIL_RE.match(email) is not None


def is_valid_phone(phone: str) -> bool:
    return PHONE_RE.match(phone) is not None


def validate_cart_items(items: Any) -> list[str]:
    if not isinstance(items, list):
        return ["Cart items must be an array"]

    errors: list[str] = []
    for index, item in enumerate(items, start=1):
        if not isinstance(item, Mapping):
            item = {}
        if not item.get("name"):
            errors.append(f"Item {index}: Name is required")
        if not item.get("selectedColor"):
            errors.append(f"Item {index}: Color is required")
        quantity = item.get("quantity")
        if not _is_number(quantity) or quantity <= 0:
            errors.append(f"Item {index}: Invalid quantity")
        price = item.get("price")
        if not _is_number(price) or price < 0:
            errors.append(f"Item {index}: Invalid price")

        breakdown = item.get("sizeBreakdown")
        if not isinstance(breakdown, list):
            errors.append(f"Item {index}: Size breakdown must be an array")
            continue
        for size_index, size in enumerate(breakdown, start=1):
            if not isinstance(size, Mapping):
                size = {}
            if not size.get("size"):
                errors.append(f"Item {index}, Size {size_index}: Size is required")
            size_quantity = size.get("quantity")
            if not _is_number(size_quantity) or size_quantity <= 0:
                errors.append(f"Item {index}, Size {size_index}: Invalid quantity")
    return errors


def contact_names(payload: Mapping[str, Any]) -> tuple[str, str]:
    """Explicit first/last names win over the split of a combined ``name``."""
    first, last = split_name(payload.get("name"))
    return _text(payload.get("firstName")) or first, _text(payload.get("lastName")) or last


def validate_order(payload: Any) -> ValidationResult:
    if not isinstance(payload, Mapping):
        return ValidationResult(valid=False, errors=["Invalid order payload"])

    items = payload.get("cartItems")
    errors = validate_cart_items(items)

    first_name, _ = contact_names(payload)
    email = _text(payload.get("email"))
    phone = _text(payload.get("phone"))
    if not first_name:
        errors.append("First name is required")
    if not email:
        errors.append("Email is required")
    if not phone:
        errors.append("Phone number is required")
    if not _text(payload.get("company")):
        errors.append("Company name is required")
    if isinstance(items, list) and not items:
        errors.append("Cart is empty")

    if email and not is_valid_email(email):
        errors.append("Invalid email format")
    if phone and not is_valid_phone(phone):
        errors.append("Invalid phone number format")

    return ValidationResult(valid=not errors, errors=errors)


def build_order_payload(payload: Mapping[str, Any]) -> OrderPayload:
    """Sanitized order for the mail templates. Call only after validate_order passes."""
    first_name, last_name = contact_names(payload)
    notes = sanitize_input(payload.get("notes"))
    cart_items = [
        {
            "name": sanitize_input(item["name"]),
            "selectedColor": sanitize_input(item["selectedColor"]),
            "quantity": item["quantity"],
            "price": item["price"],
            "sizeBreakdown": [
                {"size": sanitize_input(size["size"]), "quantity": size["quantity"]}
                for size in item["sizeBreakdown"]
            ],
        }
        for item in payload["cartItems"]
    ]
    return OrderPayload(
        first_name=sanitize_input(first_name),
        last_name=sanitize_input(last_name),
        email=sanitize_input(payload.get("email")),
        phone=sanitize_input(payload.get("phone")),
        company=sanitize_input(payload.get("company")),
        notes=notes or None,
        cart_items=cart_items,
    )


def validate_contact(payload: Any) -> ValidationResult:
    if not isinstance(payload, Mapping):
        return ValidationResult(valid=False, errors=["Missing required fields"])
    required = ("company", "name", "email", "message")
    if any(not _text(payload.get(key)) for key in required):
        return ValidationResult(valid=False, errors=["Missing required fields"])
    if not is_valid_email(_text(payload.get("email"))):
        return ValidationResult(valid=False, errors=["Invalid email format"])
    return ValidationResult(valid=True)


def build_contact_message(payload: Mapping[str, Any]) -> ContactMessage:
    phone = sanitize_input(payload.get("phone"))
    return ContactMessage(
        company=sanitize_input(payload.get("company")),
        name=sanitize_input(payload.get("name")),
        email=sanitize_input(payload.get("email")),
        phone=phone or None,
        message=sanitize_input(payload.get("message")),
    )
