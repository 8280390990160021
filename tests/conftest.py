"""Shared fixtures for DirectPromo tests."""

import pytest

from directpromo.schemas import CartLineItem, SizeQuantity


class RecordingMailer:
    """Stands in for the SMTP mailer and keeps what it was asked to send."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.orders = []
        self.contacts = []

    def send_order_notification(self, order, logo=None):
        if self.fail:
            from directpromo.errors import MailDeliveryError

            raise MailDeliveryError(order.email, "connection refused")
        self.orders.append((order, logo))

    def send_contact_notification(self, message):
        if self.fail:
            from directpromo.errors import MailDeliveryError

            raise MailDeliveryError(message.email, "connection refused")
        self.contacts.append(message)


def make_item(product_id="p1", color="Red", sizes=(("S", 1),), price=10.0, **overrides) -> CartLineItem:
    breakdown = [SizeQuantity(size=s, quantity=q) for s, q in sizes]
    data = {
        "id": product_id,
        "name": f"Product {product_id}",
        "price": price,
        "min_order": 1,
        "category": "apparel",
        "colors": ["Red", "Blue"],
        "sizes": ["S", "M", "L"],
        "selected_color": color,
        "size_breakdown": breakdown,
        "quantity": sum(q for _, q in sizes),
    }
    data.update(overrides)
    return CartLineItem(**data)


def order_payload(**overrides) -> dict:
    payload = {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane@example.com",
        "phone": "(416) 555-0199",
        "company": "Acme Corp",
        "notes": "Logo on the left chest",
        "cartItems": [
            {
                "name": "Premium Cotton T-Shirt",
                "selectedColor": "Navy",
                "quantity": 24,
                "price": 9.99,
                "sizeBreakdown": [
                    {"size": "M", "quantity": 12},
                    {"size": "L", "quantity": 12},
                ],
            }
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def store():
    from directpromo.store import CartStore

    return CartStore()


@pytest.fixture
def client(mailer, store):
    from fastapi.testclient import TestClient

    from directpromo.main import app, get_mailer
    from directpromo.store import get_store

    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
