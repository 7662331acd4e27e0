# app/schemas/product.py
from pydantic import field_validator, model_validator

from app.schemas.common import (
    CamelModel,
    EntityRead,
    strip_optional,
    strip_required,
)

_PREMIUM_RICE = ["sona-monsuli", "katarni", "jeera-masina"]

# slug -> label + allowed subcategory slugs
PRODUCT_CATEGORIES: dict[str, dict] = {
    "manasuli-premium-rice": {
        "label": "Manasuli Premium Rice",
        "subcategories": _PREMIUM_RICE,
    },
    "surayadaya-premium-rice": {
        "label": "Surayadaya Premium Rice",
        "subcategories": _PREMIUM_RICE,
    },
    "local-chamal": {"label": "Local Chamal", "subcategories": []},
    "bhus": {"label": "Bhus", "subcategories": []},
    "kanika": {"label": "Kanika", "subcategories": []},
}

_LABEL_TO_SLUG = {
    meta["label"].lower(): slug for slug, meta in PRODUCT_CATEGORIES.items()
}


def normalize_category(raw: str) -> str:
    """
    Accept a category slug or its display label and return the slug.

    Raises:
        ValueError: if the category is not one of PRODUCT_CATEGORIES.
    """
    value = raw.strip()
    if value in PRODUCT_CATEGORIES:
        return value
    slug = _LABEL_TO_SLUG.get(value.lower())
    if slug is None:
        raise ValueError("Invalid category")
    return slug


class ProductCreate(CamelModel):
    """
    Payload for creating a product.

    - price is a display string ("Rs. 2,400 / 25kg"), not a number
    - subcategory must belong to the category; "" / "none" means no subcategory
    - inStock defaults to False when omitted
    """

    name: str
    description: str
    price: str
    category: str
    subcategory: str | None = None
    image: str | None = None
    in_stock: bool = False
    whatsapp_phone: str | None = None

    @field_validator("name", "description", "price")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str) -> str:
        return normalize_category(v)

    @field_validator("subcategory", "image", "whatsapp_phone")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @field_validator("in_stock", mode="before")
    @classmethod
    def coerce_in_stock(cls, v):
        return False if v is None else v

    @model_validator(mode="after")
    def validate_subcategory(self):
        if self.subcategory is None or self.subcategory.lower() == "none":
            self.subcategory = None
            return self
        allowed = PRODUCT_CATEGORIES[self.category]["subcategories"]
        if self.subcategory not in allowed:
            raise ValueError(
                f"Invalid subcategory '{self.subcategory}' for category '{self.category}'"
            )
        return self


class ProductUpdate(ProductCreate):
    """
    Full-record update payload: same rules as create, plus the target id.

    version is optional; when sent, a stale value is rejected as a conflict.
    """

    id: str
    version: int | None = None


class ProductRead(EntityRead):
    name: str
    description: str
    price: str
    category: str
    subcategory: str | None = None
    image: str | None = None
    in_stock: bool
    whatsapp_phone: str | None = None


class ProductEnvelope(CamelModel):
    success: bool = True
    product: ProductRead


class ProductListEnvelope(CamelModel):
    success: bool = True
    products: list[ProductRead]
