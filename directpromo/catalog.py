from __future__ import annotations
from typing import Optional

from directpromo.schemas import CategoryInfo, Product

# Static catalog, loaded once at import
_SEED_PRODUCTS: list[dict] = [
    {"id": "premium-tshirt", "name": "Premium Cotton T-Shirt", "description": "High-quality cotton t-shirt perfect for custom printing", "price": 9.99, "minOrder": 24, "category": "apparel", "image": "/images/products/tshirt.jpg", "colors": ["White", "Black", "Navy", "Gray", "Red"], "sizes": ["S", "M", "L", "XL", "2XL"]},
    {"id": "classic-polo", "name": "Classic Polo Shirt", "description": "Professional polo shirt for corporate wear", "price": 14.50, "minOrder": 24, "category": "apparel", "image": "/images/products/polo.jpg", "colors": ["White", "Black", "Navy", "Red", "Forest Green"], "sizes": ["S", "M", "L", "XL", "2XL"]},
    {"id": "zip-hoodie", "name": "Zip-Up Hoodie", "description": "Comfortable zip-up hoodie for all seasons", "price": 24.99, "minOrder": 20, "category": "apparel", "image": "/images/products/hoodie.jpg", "colors": ["Black", "Gray", "Navy", "Maroon"], "sizes": ["S", "M", "L", "XL", "2XL"]},
    {"id": "lightweight-jacket", "name": "Lightweight Jacket", "description": "Stylish and practical lightweight jacket", "price": 34.75, "minOrder": 15, "category": "apparel", "image": "/images/products/jacket.jpg", "colors": ["Black", "Navy", "Gray", "Khaki"], "sizes": ["S", "M", "L", "XL", "2XL"]},
]

PRODUCTS: tuple[Product, ...] = tuple(Product(**p) for p in _SEED_PRODUCTS)

CATEGORIES: dict[str, CategoryInfo] = {
    "apparel": CategoryInfo(
        slug="apparel",
        title="Apparel Products",
        description="High-quality custom apparel including t-shirts, polos, jackets, and caps.\nPerfect for company uniforms, events, or promotional giveaways.",
        image="/images/categories/apparel-hero.jpg",
    ),
    "bags": CategoryInfo(
        slug="bags",
        title="Bags & Totes",
        description="Professional bags and totes for any occasion.\nCustomize with your logo for trade shows, conferences, or corporate gifts.",
        image="/images/categories/bags-hero.jpg",
    ),
    "tech": CategoryInfo(
        slug="tech",
        title="Tech Accessories",
        description="Modern tech accessories for the digital age.\nPromote your brand with custom gadgets and tech essentials.",
        image="/images/categories/tech-hero.jpg",
    ),
    "drinkware": CategoryInfo(
        slug="drinkware",
        title="Drinkware Collection",
        description="Premium drinkware for every beverage need.\nEco-friendly options perfect for corporate sustainability initiatives.",
        image="/images/categories/drinkware-hero.jpg",
    ),
}

DEFAULT_CATEGORY = CategoryInfo(
    slug="",
    title="Products",
    description="Browse our collection of high-quality promotional products.\nAll items can be customized with your logo.",
    image="/images/categories/default-hero.jpg",
)


def list_products(category: Optional[str] = None, q: Optional[str] = None) -> list[Product]:
    products = list(PRODUCTS)
    if category:
        products = [p for p in products if p.category == category]
    if q:
        # Simple case-insensitive name search
        needle = q.lower()
        products = [p for p in products if needle in p.name.lower()]
    return products


def get_product(product_id: str) -> Optional[Product]:
    for product in PRODUCTS:
        if product.id == product_id:
            return product
    return None


def get_category_info(category: str) -> CategoryInfo:
    info = CATEGORIES.get(category)
    if info is None:
        return DEFAULT_CATEGORY.model_copy(update={"slug": category})
    return info
