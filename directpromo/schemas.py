from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

# Wire names follow the storefront (camelCase); attributes stay snake_case

# Catalog
class ProductFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str = ""
    # None => "call for pricing"
    price: Optional[float] = Field(default=None, ge=0)
    min_order: int = Field(default=1, ge=1, alias="minOrder")
    category: str
    image: Optional[str] = None
    colors: list[str] = []
    sizes: list[str] = []


class Product(ProductFields):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class CategoryInfo(BaseModel):
    slug: str
    title: str
    description: str
    image: Optional[str] = None


class CategoryOut(CategoryInfo):
    products: list[Product] = []



# Cart
# Keeps price totals well inside float range
MAX_LINE_QUANTITY = 1_000_000


class SizeQuantity(BaseModel):
    size: str
    quantity: int = 0


class CartLineItem(ProductFields):
    selected_color: str = Field(alias="selectedColor")
    size_breakdown: list[SizeQuantity] = Field(default=[], alias="sizeBreakdown")
    quantity: int = 0


class SizeQuantityIn(BaseModel):
    size: str
    quantity: int = Field(ge=0, le=MAX_LINE_QUANTITY)


class AddItemIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId")
    selected_color: str = Field(alias="selectedColor")
    size_breakdown: list[SizeQuantityIn] = Field(alias="sizeBreakdown")


class UpdateQuantityIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(alias="productId")
    color: str
    size: str
    quantity: int = Field(le=MAX_LINE_QUANTITY)


class CartOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    items: list[CartLineItem]
    total_items: int = Field(alias="totalItems")
    total_price: float = Field(alias="totalPrice")


class CartCreated(BaseModel):
    id: str



# Orders / Contact
class ValidationResult(BaseModel):
    valid: bool
    errors: list[str] = []


class OrderSize(BaseModel):
    size: str
    quantity: int | float


class OrderItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    selected_color: str = Field(alias="selectedColor")
    quantity: int | float
    price: int | float
    size_breakdown: list[OrderSize] = Field(default=[], alias="sizeBreakdown")

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class OrderPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    first_name: str = Field(alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str
    phone: str
    company: str
    notes: Optional[str] = None
    cart_items: list[OrderItem] = Field(alias="cartItems")

    @property
    def total_amount(self) -> float:
        return sum(item.line_total for item in self.cart_items)


class ContactMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    company: str
    name: str
    email: str
    phone: Optional[str] = None
    message: str


class SubmissionOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: Optional[str] = None
    order_id: Optional[str] = Field(default=None, alias="orderId")

