"""Public entity model building.

Raw documents carry internal fields next to public attributes:

- ``_hidden``: cross-system references, never returned to callers
- ``_metadata_<name>``: timestamps, exposed as ``_metadata.<name>``

The public model is a flat dict with ``id`` taken from the key and the
internal fields removed.
"""

from collections.abc import Mapping
from typing import Any

from clientele.datastore.models import RawEntity

Entity = dict[str, Any]

HIDDEN_FIELD = "_hidden"
METADATA_PREFIX = "_metadata"
METADATA_CREATED = "_metadata_created"
METADATA_UPDATED = "_metadata_updated"


def is_internal_field(name: str) -> bool:
    """Whether a raw field is withheld from the public model."""
    return name == HIDDEN_FIELD or name.startswith(METADATA_PREFIX)


def build_model(raw: RawEntity) -> Entity:
    """Build the public model of a raw document."""
    metadata = {
        name[len(METADATA_PREFIX) + 1 :]: value
        for name, value in raw.data.items()
        if name.startswith(f"{METADATA_PREFIX}_")
    }
    model: Entity = {"id": raw.key.id}
    model.update(
        (name, value) for name, value in raw.data.items() if not is_internal_field(name)
    )
    model["_metadata"] = metadata
    return model


def writable_attributes(params: Mapping[str, Any], *exclude: str) -> dict[str, Any]:
    """Caller-supplied attributes that may be written to a document.

    Drops ``id``, the public ``_metadata`` block, internal fields and any
    names listed in exclude.
    """
    return {
        name: value
        for name, value in params.items()
        if name != "id" and not is_internal_field(name) and name not in exclude
    }


def preserved_fields(raw: RawEntity, *names: str) -> dict[str, Any]:
    """Pick internal fields of a raw document to carry into an update."""
    return {name: raw.data[name] for name in names if name in raw.data}
