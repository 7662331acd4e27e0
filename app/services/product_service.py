# app/services/product_service.py
from app.models.product import Product
from app.services.resource_service import ResourceService


class ProductService(ResourceService[Product]):
    """
    Business logic for the product catalog.

    Category / subcategory rules live in the request schemas; the service
    only owns persistence bookkeeping and image cleanup.
    """

    kind = "Product"
    attachment_fields = ("image",)
