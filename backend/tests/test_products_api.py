"""
HelloWebAPI Backend — Product Route Tests
==========================================

What:  End-to-end tests of the /api product resource through the full app
       (middleware, route table, binders, exception handlers).
How:   httpx AsyncClient over ASGITransport; no server process.
"""

import xml.etree.ElementTree as ET

import pytest

from hellowebapi.services.product_service import CATALOG


class TestReadRoutes:

    @pytest.mark.asyncio
    async def test_list_products_returns_all_six_in_order(self, test_client):
        response = await test_client.get("/api/Products")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        body = response.json()
        assert [p["Id"] for p in body] == [1, 2, 3, 4, 5, 6]
        assert body[0] == {"Id": 1, "Name": "Tomato Soup", "Category": "Groceries", "Price": 1}
        assert body[1]["Price"] == 3.75

    @pytest.mark.asyncio
    async def test_hammer_products(self, test_client):
        response = await test_client.get("/api/HammerProducts")

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 4
        assert all(p["Name"] == "Hammer" for p in body)
        assert [p["Id"] for p in body] == [3, 4, 5, 6]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("product_id", [1, 2, 3, 4, 5, 6])
    async def test_get_product_returns_first_match(self, test_client, product_id):
        response = await test_client.get(f"/api/Products/{product_id}")

        assert response.status_code == 200
        expected = next(p for p in CATALOG if p.id == product_id)
        assert response.json() == expected.model_dump(mode="json", by_alias=True)

    @pytest.mark.asyncio
    async def test_get_missing_product_is_404(self, test_client):
        response = await test_client.get("/api/Products/999")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert "999" in body["message"]
        assert body["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_non_numeric_id_is_not_routed(self, test_client):
        response = await test_client.get("/api/Products/abc")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_negative_id_is_not_found_with_error_body(self, test_client):
        response = await test_client.get("/api/Products/-1")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert "-1" in body["message"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path, count",
        [
            ("/api/products", 6),
            ("/api/PRODUCTS", 6),
            ("/api/hammerproducts", 4),
            ("/API/HammerProducts", 4),
            ("/api/products/getdata", 6),
        ],
    )
    async def test_paths_match_regardless_of_case(self, test_client, path, count):
        response = await test_client.get(path)

        assert response.status_code == 200
        assert len(response.json()) == count

    @pytest.mark.asyncio
    async def test_lowercase_id_route(self, test_client):
        response = await test_client.get("/api/products/2")

        assert response.status_code == 200
        assert response.json()["Id"] == 2

    @pytest.mark.asyncio
    async def test_getall_returns_utf16_hello_with_cache_header(self, test_client):
        response = await test_client.get("/api/Products/getall")

        assert response.status_code == 200
        assert response.content == "hello".encode("utf-16-le")
        assert response.headers["cache-control"] == "max-age=1200"
        assert "utf-16" in response.headers["content-type"]

    @pytest.mark.asyncio
    async def test_getdata_returns_all_products(self, test_client):
        response = await test_client.get("/api/Products/getdata")

        assert response.status_code == 200
        assert response.json() == [p.model_dump(mode="json", by_alias=True) for p in CATALOG]


class TestContentNegotiation:

    @pytest.mark.asyncio
    async def test_accept_xml_returns_xml_array(self, test_client):
        response = await test_client.get(
            "/api/Products/getdata", headers={"Accept": "application/xml"}
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        root = ET.fromstring(response.content)
        assert root.tag == "ArrayOfProduct"
        assert [item.findtext("Id") for item in root] == ["1", "2", "3", "4", "5", "6"]
        assert root[1].findtext("Price") == "3.75"

    @pytest.mark.asyncio
    async def test_accept_xml_single_product(self, test_client):
        response = await test_client.get("/api/Products/2", headers={"Accept": "text/xml"})

        root = ET.fromstring(response.content)
        assert root.tag == "Product"
        assert root.findtext("Name") == "Yo-yo"

    @pytest.mark.asyncio
    async def test_wildcard_accept_returns_json(self, test_client):
        response = await test_client.get("/api/HammerProducts", headers={"Accept": "*/*"})

        assert response.headers["content-type"].startswith("application/json")
        assert len(response.json()) == 4

    @pytest.mark.asyncio
    async def test_json_preferred_by_quality(self, test_client):
        response = await test_client.get(
            "/api/Products",
            headers={"Accept": "application/xml;q=0.5, application/json"},
        )
        assert response.headers["content-type"].startswith("application/json")

    @pytest.mark.asyncio
    async def test_xml_disabled_falls_back_to_json(self, test_client, monkeypatch):
        from hellowebapi.config import settings
        monkeypatch.setattr(settings, "xml_formatter_enabled", False)

        response = await test_client.get("/api/Products", headers={"Accept": "application/xml"})

        assert response.headers["content-type"].startswith("application/json")
        assert len(response.json()) == 6


class TestWriteRoutes:

    @pytest.mark.asyncio
    async def test_save_id_accepts_string_body(self, test_client):
        response = await test_client.post("/api/SaveId/", json="abc-123")

        assert response.status_code == 204
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_save_id_with_unreadable_body_still_succeeds(self, test_client):
        response = await test_client.post(
            "/api/SaveId/", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 204

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ['"abc"', '{"productId": "1", "name": "x"}', ""])
    async def test_save_multiple_always_fails_binding(self, test_client, body):
        response = await test_client.post(
            "/api/SaveMultiple/",
            content=body.encode(),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        payload = response.json()
        assert payload["error"] == "binding_error"
        assert payload["message"] == (
            "Can't bind multiple parameters ('productId' and 'name') to the request's content."
        )
        assert payload["details"]["parameters"] == ["productId", "name"]

    @pytest.mark.asyncio
    async def test_save_product_returns_fixed_text(self, test_client, sample_product_body):
        response = await test_client.post("/api/Product/", json=sample_product_body)

        assert response.status_code == 200
        assert response.text == "POST: Test message"
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"", b"[1, 2, 3]", b"<<garbage>>", b'{"Id": "nope"}'])
    async def test_save_product_ignores_payload(self, test_client, body):
        response = await test_client.post(
            "/api/Product/", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 200
        assert response.text == "POST: Test message"

    @pytest.mark.asyncio
    async def test_update_with_query_id(self, test_client, sample_product_body):
        response = await test_client.put("/api/update/?id=5", json=sample_product_body)

        assert response.status_code == 200
        assert response.text == "PUT: Test message"

    @pytest.mark.asyncio
    async def test_update_with_route_id_and_bad_body(self, test_client):
        response = await test_client.put(
            "/api/update/7", content=b"not a product", headers={"Content-Type": "text/plain"}
        )

        assert response.status_code == 200
        assert response.text == "PUT: Test message"

    @pytest.mark.asyncio
    async def test_update_with_negative_route_id(self, test_client, sample_product_body):
        response = await test_client.put("/api/update/-3", json=sample_product_body)

        assert response.status_code == 200
        assert response.text == "PUT: Test message"

    @pytest.mark.asyncio
    async def test_update_without_id_is_bad_request(self, test_client, sample_product_body):
        response = await test_client.put("/api/update/", json=sample_product_body)

        assert response.status_code == 400
        assert response.json()["error"] == "binding_error"

    @pytest.mark.asyncio
    async def test_update_with_non_integer_id_is_bad_request(self, test_client):
        response = await test_client.put("/api/update/?id=seven", json={})
        assert response.status_code == 400


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["product_count"] == 6
