"""Unit tests for product/auth request schemas: field rules and camelCase aliases."""

import unittest
from decimal import Decimal

from pydantic import ValidationError

from store_api.schemas.auth import LoginRequest
from store_api.schemas.product import PriceUpdate, ProductCreate, validate_price


def _messages(exc: ValidationError) -> dict[str, str]:
    return {str(e["loc"][-1]): e["msg"] for e in exc.errors()}


class TestValidatePrice(unittest.TestCase):
    def test_accepts_typical_prices(self) -> None:
        for value in ("0.01", "9.99", "100", "9999999999.99"):
            self.assertEqual(validate_price(Decimal(value)), Decimal(value))

    def test_rejects_non_positive(self) -> None:
        for value in ("0", "0.00", "-1"):
            with self.assertRaisesRegex(ValueError, "greater than 0"):
                validate_price(Decimal(value))

    def test_rejects_too_many_digits(self) -> None:
        for value in ("1.001", "10000000000.00"):
            with self.assertRaisesRegex(ValueError, "10 integer digits"):
                validate_price(Decimal(value))

    def test_rejects_non_finite(self) -> None:
        with self.assertRaises(ValueError):
            validate_price(Decimal("NaN"))

    def test_rejects_missing(self) -> None:
        with self.assertRaisesRegex(ValueError, "required"):
            validate_price(None)


class TestProductCreate(unittest.TestCase):
    def test_accepts_camel_case_and_strips_text(self) -> None:
        data = ProductCreate.model_validate(
            {"name": "  Widget ", "category": "Tools", "price": "9.99", "stockQuantity": 5}
        )
        self.assertEqual(data.name, "Widget")
        self.assertEqual(data.stock_quantity, 5)
        self.assertEqual(data.price, Decimal("9.99"))
        self.assertTrue(data.active)
        self.assertIsNone(data.brand)

    def test_accepts_field_names(self) -> None:
        data = ProductCreate(name="Widget", category="Tools", price=Decimal("1"), stock_quantity=0)
        self.assertEqual(data.stock_quantity, 0)

    def test_field_messages(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            ProductCreate.model_validate(
                {
                    "name": "",
                    "category": "x" * 51,
                    "price": "-5",
                    "stockQuantity": -1,
                    "description": "d" * 501,
                    "brand": "b" * 51,
                }
            )
        messages = _messages(ctx.exception)
        self.assertIn("Product name is required", messages["name"])
        self.assertIn("Category must be between 2 and 50 characters", messages["category"])
        self.assertIn("Price must be greater than 0", messages["price"])
        self.assertIn("Stock quantity cannot be negative", messages["stockQuantity"])
        self.assertIn("Description cannot exceed 500 characters", messages["description"])
        self.assertIn("Brand cannot exceed 50 characters", messages["brand"])

    def test_non_string_name_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            ProductCreate.model_validate(
                {"name": 42, "category": "Tools", "price": "1", "stockQuantity": 1}
            )


class TestPriceUpdate(unittest.TestCase):
    def test_camel_case_field(self) -> None:
        self.assertEqual(PriceUpdate.model_validate({"newPrice": 3.5}).new_price, Decimal("3.5"))

    def test_rejects_zero(self) -> None:
        with self.assertRaises(ValidationError):
            PriceUpdate.model_validate({"newPrice": 0})


class TestLoginRequest(unittest.TestCase):
    def test_requires_non_blank_values(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            LoginRequest.model_validate({"username": " ", "password": ""})
        messages = _messages(ctx.exception)
        self.assertIn("Username is required", messages["username"])
        self.assertIn("Password is required", messages["password"])
