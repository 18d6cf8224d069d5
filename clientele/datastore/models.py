"""Document store record models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from clientele.datastore.keys import Key


class SaveMethod(str, Enum):
    """Write semantics for DocumentStore.save."""

    INSERT = "insert"
    """Fail when a document already exists at the key."""

    UPDATE = "update"
    """Fail when no document exists at the key; overwrite otherwise."""


@dataclass
class RawEntity:
    """Storage envelope: the key plus the unfiltered document data."""

    key: Key
    data: dict[str, Any] = field(default_factory=dict)
