"""
Built-in sample documents, each exercising a different inference feature.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Sample:
    name: str
    description: str
    value: Any

    @property
    def text(self) -> str:
        """The sample as pretty-printed JSON."""
        return json.dumps(self.value, indent=2)


SAMPLES = [
    Sample(
        name="simple-user-profile",
        description="Basic object with string, number, and boolean fields",
        value={
            "name": "Alice Johnson",
            "email": "alice@example.com",
            "age": 30,
            "active": True,
        },
    ),
    Sample(
        name="ecommerce-order",
        description="Nested object with arrays, shipping address, and line items",
        value={
            "orderId": "ORD-2025-001",
            "customer": {"id": 42, "name": "Bob Smith", "email": "bob@shop.com"},
            "items": [
                {
                    "productId": "SKU-100",
                    "name": "Wireless Headphones",
                    "quantity": 2,
                    "price": 59.99,
                    "category": {"id": 5, "name": "Electronics"},
                },
                {
                    "productId": "SKU-200",
                    "name": "Laptop Stand",
                    "quantity": 1,
                    "price": 39.99,
                    "category": {"id": 8, "name": "Accessories"},
                },
            ],
            "shipping": {
                "method": "express",
                "address": {
                    "street": "123 Main St",
                    "city": "Portland",
                    "state": "OR",
                    "zip": "97201",
                    "country": "US",
                },
                "trackingNumber": "1Z999AA10123456784",
            },
            "total": 159.97,
            "currency": "USD",
        },
    ),
    Sample(
        name="optional-fields",
        description="Array of objects where some objects omit keys, detects optional fields",
        value=[
            {"id": 1, "name": "Alice", "email": "alice@example.com", "phone": "+1-555-0100"},
            {"id": 2, "name": "Bob", "email": "bob@example.com"},
            {"id": 3, "name": "Charlie", "phone": "+1-555-0300", "nickname": "Chuck"},
        ],
    ),
    Sample(
        name="mixed-array-types",
        description="Arrays with mixed element types, generates union types",
        value={
            "mixedPrimitives": [1, "two", True, None],
            "tags": ["alpha", "beta", "gamma"],
            "scores": [95, 87, 92, 100],
            "metadata": {"values": [42, "hello", False]},
        },
    ),
    Sample(
        name="nullables-and-dates",
        description="Fields with null values and ISO-8601 date strings (use --detect-dates)",
        value={
            "user_id": 1001,
            "user_name": "Diana Prince",
            "created_at": "2025-01-15T09:30:00.000Z",
            "updated_at": "2025-06-20T14:45:30.000Z",
            "deleted_at": None,
            "last_login": "2025-12-01T08:00:00Z",
            "bio": None,
            "avatar_url": "https://example.com/avatars/diana.jpg",
            "settings": {"theme": "dark", "notifications_enabled": True, "language": "en"},
        },
    ),
]


def get_sample(name: str) -> Sample:
    """Look up a built-in sample by name. Raises KeyError if there is none."""
    for sample in SAMPLES:
        if sample.name == name:
            return sample
    raise KeyError(f"No sample named {name!r}")
