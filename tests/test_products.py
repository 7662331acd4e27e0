# tests/test_products.py
import logging

UNKNOWN_ID = "65a1b2c3d4e5f60718293a4b"


class TestProductCreate:
    """POST /api/products"""

    def test_create_product(self, client, factory):
        """Created product carries id, version and camelCase fields"""
        response = client.post("/api/products", json=factory.product())
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        product = body["product"]
        assert len(product["id"]) == 24
        assert product["version"] == 1
        assert product["inStock"] is True
        assert product["subcategory"] == "sona-monsuli"

    def test_category_label_is_normalized(self, client, factory):
        """Display labels are stored as slugs"""
        response = client.post(
            "/api/products",
            json=factory.product(category="Manasuli Premium Rice"),
        )
        assert response.status_code == 200
        assert response.json()["product"]["category"] == "manasuli-premium-rice"

    def test_in_stock_defaults_to_false(self, client, factory):
        """Omitted inStock is stored as false"""
        payload = factory.product()
        del payload["inStock"]
        response = client.post("/api/products", json=payload)
        assert response.json()["product"]["inStock"] is False

    def test_subcategory_not_allowed_for_category(self, client, factory):
        """Bhus has no subcategories"""
        response = client.post(
            "/api/products",
            json=factory.product(category="bhus", subcategory="katarni"),
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "Invalid subcategory" in body["error"]

    def test_none_subcategory_is_cleared(self, client, factory):
        """'none' means no subcategory"""
        response = client.post(
            "/api/products",
            json=factory.product(category="kanika", subcategory="none"),
        )
        assert response.status_code == 200
        assert "subcategory" not in response.json()["product"]

    def test_unknown_category(self, client, factory):
        """Unknown category is a 400"""
        response = client.post("/api/products", json=factory.product(category="wheat"))
        assert response.status_code == 400
        assert "Invalid category" in response.json()["error"]

    def test_missing_required_fields(self, client):
        """Missing fields are reported by name"""
        response = client.post("/api/products", json={"name": "Rice"})
        assert response.status_code == 400
        error = response.json()["error"]
        assert "description" in error
        assert "price" in error

    def test_blank_name_rejected(self, client, factory):
        """Whitespace-only text fields are rejected"""
        response = client.post("/api/products", json=factory.product(name="   "))
        assert response.status_code == 400
        assert "field cannot be empty" in response.json()["error"]


class TestProductList:
    """GET /api/products"""

    def test_empty_list(self, client):
        response = client.get("/api/products")
        assert response.status_code == 200
        assert response.json() == {"success": True, "products": []}

    def test_lists_out_of_stock_products_too(self, client, factory):
        """Listing does not filter by stock"""
        client.post("/api/products", json=factory.product(inStock=True))
        client.post("/api/products", json=factory.product(name="Bhus", category="bhus", subcategory=None, inStock=False))
        products = client.get("/api/products").json()["products"]
        assert [p["name"] for p in products] == ["Sona Monsuli Rice", "Bhus"]

    def test_categories(self, client):
        """Category catalogue exposes slugs and subcategories"""
        categories = client.get("/api/products/categories").json()["categories"]
        assert categories["bhus"]["subcategories"] == []
        assert "katarni" in categories["surayadaya-premium-rice"]["subcategories"]


class TestProductUpdate:
    """PUT /api/products"""

    def test_update_bumps_version(self, client, factory):
        created = client.post("/api/products", json=factory.product()).json()["product"]
        payload = {**created, "price": "Rs. 2,500 / 25kg"}
        response = client.put("/api/products", json=payload)
        assert response.status_code == 200
        product = response.json()["product"]
        assert product["price"] == "Rs. 2,500 / 25kg"
        assert product["version"] == 2
        assert product["id"] == created["id"]

    def test_stale_version_conflicts(self, client, factory):
        """A second writer with the old version gets 409"""
        created = client.post("/api/products", json=factory.product()).json()["product"]
        client.put("/api/products", json={**created, "name": "First"})
        response = client.put("/api/products", json={**created, "name": "Second"})
        assert response.status_code == 409
        products = client.get("/api/products").json()["products"]
        assert products[0]["name"] == "First"

    def test_update_without_version_overwrites(self, client, factory):
        """Omitting version is last-write-wins"""
        created = client.post("/api/products", json=factory.product()).json()["product"]
        client.put("/api/products", json={**created, "name": "First"})
        payload = {k: v for k, v in created.items() if k != "version"}
        response = client.put("/api/products", json={**payload, "name": "Second"})
        assert response.status_code == 200
        assert response.json()["product"]["version"] == 3

    def test_update_unknown_id(self, client, factory):
        response = client.put("/api/products", json=factory.product(id=UNKNOWN_ID))
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Product not found"}

    def test_update_malformed_id(self, client, factory):
        response = client.put("/api/products", json=factory.product(id="123"))
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid product ID format"

    def test_replacing_image_removes_old_file(self, client, factory, bucket, public_url):
        """The previous hosted image is deleted from storage"""
        bucket.objects["vargo-agro/image/old.png"] = b"old"
        old_url = public_url("vargo-agro/image/old.png")
        created = client.post("/api/products", json=factory.product(image=old_url)).json()["product"]

        response = client.put("/api/products", json={**created, "image": public_url("vargo-agro/image/new.png")})
        assert response.status_code == 200
        assert "vargo-agro/image/old.png" not in bucket.objects


class TestProductDelete:
    """DELETE /api/products?id="""

    def test_delete_twice(self, client, factory):
        """Second delete of the same id is a 404"""
        created = client.post("/api/products", json=factory.product()).json()["product"]
        first = client.delete(f"/api/products?id={created['id']}")
        assert first.status_code == 200
        assert first.json() == {"success": True}

        second = client.delete(f"/api/products?id={created['id']}")
        assert second.status_code == 404
        assert second.json()["error"] == "Product not found"

    def test_delete_requires_id(self, client):
        response = client.delete("/api/products")
        assert response.status_code == 400
        assert response.json()["error"] == "Product ID is required"

    def test_delete_malformed_id(self, client):
        response = client.delete("/api/products?id=not-an-id")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid product ID format"

    def test_delete_removes_hosted_image(self, client, factory, bucket, public_url):
        bucket.objects["vargo-agro/image/p.png"] = b"img"
        created = client.post(
            "/api/products",
            json=factory.product(image=public_url("vargo-agro/image/p.png")),
        ).json()["product"]
        client.delete(f"/api/products?id={created['id']}")
        assert bucket.objects == {}

    def test_delete_unknown_is_not_logged_as_error(self, client, caplog):
        """A missing product is an expected outcome, not a failed write"""
        with caplog.at_level(logging.INFO):
            response = client.delete(f"/api/products?id={UNKNOWN_ID}")
        assert response.status_code == 404
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert any("not found" in r.getMessage() for r in caplog.records)
