"""
Name allocator for object types.

Turns structural paths into PascalCase type names ("Root", "RootUser",
"RootUserAddress") and resolves collisions with numeric suffixes.
"""

from __future__ import annotations

from collections.abc import Sequence

from ...utils import to_pascal_case

DEFAULT_ROOT_NAME = "Root"


class NameAllocator:
    """Allocates unique type names for a single inference run.

    An allocator must not be shared between runs: names are a pure function
    of the calls made on one instance.
    """

    def __init__(self, root_name: str = DEFAULT_ROOT_NAME):
        """
        Initialize the allocator.

        Args:
            root_name: Name returned for an empty path
        """
        self.root_name = root_name
        self._used_names: dict[str, int] = {}
        self._produced: set[str] = set()

    def allocate(self, path_segments: Sequence[str]) -> str:
        """
        Allocate a unique name from path segments.

        The first use of a base name returns it bare, later uses get the
        occurrence count appended ("User", "User2", "User3").

        Args:
            path_segments: Structural path, e.g. ["user", "address"]

        Returns:
            PascalCase name like "UserAddress"
        """
        base_name = "".join(to_pascal_case(segment) for segment in path_segments) or self.root_name
        if base_name[:1].isdigit():
            base_name = "_" + base_name

        count = self._used_names.get(base_name, 0) + 1
        name = base_name if count == 1 else f"{base_name}{count}"

        # A suffixed name can clash with a base name produced from another path ("User2")
        while name in self._produced:
            count += 1
            name = f"{base_name}{count}"

        self._used_names[base_name] = count
        self._produced.add(name)
        return name

    def reserve(self, name: str) -> None:
        """Mark a name as taken without deriving it from a path."""
        self._used_names[name] = self._used_names.get(name, 0) + 1
        self._produced.add(name)

    def reset(self) -> None:
        """Forget every allocated name. Only call between independent runs."""
        self._used_names.clear()
        self._produced.clear()
