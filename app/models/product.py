# app/models/product.py
from sqlmodel import Field

from app.models.base import EntityBase


class Product(EntityBase, table=True):
    """
    Product catalog entry (rice, bhus, kanika, ...).

    Columns:
      - name, description, price (display string), category (slug),
        subcategory, image, in_stock, whatsapp_phone
    """

    __tablename__ = "products"

    name: str = Field(
        max_length=255,
        index=True,
        description="Display name of the product",
    )

    description: str = Field(
        description="Long description shown on the catalog page",
    )

    price: str = Field(
        max_length=100,
        description="Free-form display price, e.g. 'Rs. 2,400 / 25kg'",
    )

    category: str = Field(
        max_length=50,
        index=True,
        description="Category slug (see app.schemas.product.PRODUCT_CATEGORIES)",
    )

    subcategory: str | None = Field(
        default=None,
        max_length=50,
        description="Optional subcategory slug allowed by the category",
    )

    image: str | None = Field(
        default=None,
        description="Public image URL",
    )

    in_stock: bool = Field(
        default=True,
        index=True,
        description="Whether the product is currently available",
    )

    whatsapp_phone: str | None = Field(
        default=None,
        max_length=30,
        description="Phone number used for WhatsApp inquiries",
    )
