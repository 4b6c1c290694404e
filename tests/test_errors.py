"""Unit tests for store_api.core.errors: validation detail flattening and 500 translation."""

import unittest

from fastapi import FastAPI
from fastapi.testclient import TestClient

from store_api.core.errors import register_exception_handlers, validation_details
from store_api.core.exceptions import ConflictError, ValidationFailedError


class TestValidationDetails(unittest.TestCase):
    def test_strips_location_prefix_and_value_error_prefix(self) -> None:
        details = validation_details(
            [
                {"loc": ("body", "price"), "msg": "Value error, Price must be greater than 0"},
                {"loc": ("query", "quantity"), "msg": "Field required"},
            ]
        )
        self.assertEqual(
            details,
            {"price": "Price must be greater than 0", "quantity": "Field required"},
        )

    def test_nested_locations_are_dotted(self) -> None:
        details = validation_details([{"loc": ("body", "items", 0, "name"), "msg": "bad"}])
        self.assertEqual(details, {"items.0.name": "bad"})

    def test_first_message_per_field_wins(self) -> None:
        details = validation_details(
            [
                {"loc": ("body", "name"), "msg": "first"},
                {"loc": ("body", "name"), "msg": "second"},
            ]
        )
        self.assertEqual(details, {"name": "first"})

    def test_whole_body_errors(self) -> None:
        self.assertEqual(validation_details([{"loc": ("body",), "msg": "x"}]), {"request": "x"})


def _app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("secret internals")

    @app.get("/conflict")
    def conflict() -> None:
        raise ConflictError("already there")

    @app.get("/invalid")
    def invalid() -> None:
        raise ValidationFailedError.for_field("field", "is wrong")

    return app


class TestHandlers(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(_app(), raise_server_exceptions=False)

    def test_unexpected_error_is_generic_500(self) -> None:
        response = self.client.get("/boom")
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body["error"], "Internal Server Error")
        self.assertEqual(body["message"], "An unexpected error occurred")
        self.assertNotIn("secret", response.text)

    def test_domain_error_keeps_message(self) -> None:
        body = self.client.get("/conflict").json()
        self.assertEqual(body["status"], 409)
        self.assertEqual(body["message"], "already there")
        self.assertNotIn("details", body)

    def test_domain_validation_error_carries_details(self) -> None:
        response = self.client.get("/invalid")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["details"], {"field": "is wrong"})

    def test_wrong_method_uses_error_body(self) -> None:
        response = self.client.post("/conflict")
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.json()["error"], "Method Not Allowed")
