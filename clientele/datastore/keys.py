"""Hierarchical document keys.

A key is a path of (kind, id) pairs. The final pair identifies the
entity, the preceding pairs identify its ancestors:

    Customer/c1/Membership/c2  ->  (("Customer", "c1"), ("Membership", "c2"))
"""

from dataclasses import dataclass

PATH_SEPARATOR = "/"


@dataclass(frozen=True)
class PathElement:
    """Single (kind, id) step of a key path."""

    kind: str
    id: str

    def __post_init__(self) -> None:
        if not self.kind or not self.id:
            raise ValueError("Key path elements need both a kind and an id")
        if PATH_SEPARATOR in self.kind or PATH_SEPARATOR in self.id:
            raise ValueError(f"Key path elements may not contain '{PATH_SEPARATOR}'")


@dataclass(frozen=True)
class Key:
    """Immutable hierarchical key."""

    path: tuple[PathElement, ...]

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("A key needs at least one path element")

    @classmethod
    def of(cls, *parts: str) -> "Key":
        """Build a key from alternating kinds and ids.

        Example:
            Key.of("Customer", "c1", "Membership", "c2")
        """
        if not parts or len(parts) % 2:
            raise ValueError("Key parts must be (kind, id) pairs")
        return cls(
            tuple(PathElement(parts[i], parts[i + 1]) for i in range(0, len(parts), 2))
        )

    @classmethod
    def parse(cls, value: str) -> "Key":
        """Parse the string form produced by str(key)."""
        return cls.of(*value.split(PATH_SEPARATOR))

    @property
    def kind(self) -> str:
        return self.path[-1].kind

    @property
    def id(self) -> str:
        return self.path[-1].id

    @property
    def parent(self) -> "Key | None":
        if len(self.path) == 1:
            return None
        return Key(self.path[:-1])

    def child(self, kind: str, id: str) -> "Key":
        """Return the key of a child entity."""
        return Key((*self.path, PathElement(kind, id)))

    def is_ancestor_of(self, other: "Key") -> bool:
        """Whether this key is a strict prefix of other."""
        return (
            len(self.path) < len(other.path)
            and other.path[: len(self.path)] == self.path
        )

    def ancestor_id(self, kind: str) -> str | None:
        """Id of the nearest ancestor of the given kind."""
        for element in reversed(self.path[:-1]):
            if element.kind == kind:
                return element.id
        return None

    def __str__(self) -> str:
        return PATH_SEPARATOR.join(
            f"{element.kind}{PATH_SEPARATOR}{element.id}" for element in self.path
        )
