"""
Utility functions for identifier case conversion.
"""

import re

# A lowercase letter directly followed by an uppercase one marks a camelCase hump
_HUMP_PATTERN = re.compile(r"([a-z])([A-Z])")

# Word separators: underscores and anything that is not a letter or digit
_SEPARATOR_PATTERN = re.compile(r"[\W_]+")

_SNAKE_CASE_PATTERN = re.compile(r"[a-z][a-z0-9]*(_[a-z0-9]+)+")

_SNAKE_SEGMENT_PATTERN = re.compile(r"_([a-z])")

_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")


def _split_into_words(text: str) -> list[str]:
    """Split text into words on separators and camelCase boundaries."""
    return [word for word in _SEPARATOR_PATTERN.split(_HUMP_PATTERN.sub(r"\1_\2", text)) if word]


def to_pascal_case(text: str) -> str:
    """Convert snake_case, kebab-case, camelCase or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "FIRST_NAME" -> "FirstName"
        "shippingAddress" -> "ShippingAddress"
        "line-items" -> "LineItems"
        "ABC" -> "Abc"

    Args:
        text: The text to convert

    Returns:
        PascalCase string (empty for empty input)
    """
    return "".join(word[0].upper() + word[1:].lower() for word in _split_into_words(text))


def is_snake_case(text: str) -> bool:
    """Check if a string is snake_case (at least one underscore, no uppercase)."""
    return bool(_SNAKE_CASE_PATTERN.fullmatch(text))


def snake_to_camel(text: str) -> str:
    """Convert a snake_case string to camelCase ("user_name" -> "userName")."""
    return _SNAKE_SEGMENT_PATTERN.sub(lambda m: m.group(1).upper(), text)


def lower_first(text: str) -> str:
    return text[:1].lower() + text[1:]


def is_identifier(text: str) -> bool:
    """Check if a property key can be written unquoted in TypeScript."""
    return bool(_IDENTIFIER_PATTERN.fullmatch(text))
