"""Entity persistence: CRUD, metadata stamping and public models."""

from clientele.entities.models import (
    HIDDEN_FIELD,
    METADATA_CREATED,
    METADATA_UPDATED,
    Entity,
    build_model,
    preserved_fields,
    writable_attributes,
)
from clientele.entities.store import EntityStore, utc_now

__all__ = [
    "Entity",
    "EntityStore",
    "HIDDEN_FIELD",
    "METADATA_CREATED",
    "METADATA_UPDATED",
    "build_model",
    "preserved_fields",
    "writable_attributes",
    "utc_now",
]
