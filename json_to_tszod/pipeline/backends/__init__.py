"""
Code generation backends.

Each backend renders the same finished IR tree into one notation.
"""

from __future__ import annotations

from .base import CodeBackend, collect_objects
from .example_backend import ExampleBackend
from .typescript_backend import TypeScriptBackend
from .zod_backend import ZodBackend

__all__ = [
    "CodeBackend",
    "TypeScriptBackend",
    "ZodBackend",
    "ExampleBackend",
    "collect_objects",
]
