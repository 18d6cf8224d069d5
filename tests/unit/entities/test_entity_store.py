"""Tests for EntityStore and public model building."""

from datetime import UTC, datetime

import pytest

from clientele.datastore import DocumentConflictError, DocumentNotFoundError, Key, Query
from clientele.datastore.models import RawEntity
from clientele.entities import (
    EntityStore,
    build_model,
    preserved_fields,
    writable_attributes,
)
from clientele.errors import CustomerNotFoundError, EntityNotFoundError

# First reading of the clock fixture
BASE_TIME = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)
KEY = Key.of("Customer", "c1")


class TestBuildModel:
    """Tests for the public view of raw documents."""

    def test_strips_internal_fields(self) -> None:
        raw = RawEntity(
            key=KEY,
            data={
                "email": "a@example.com",
                "_hidden": {"identityProviderId": "auth0|1"},
                "_metadata_created": BASE_TIME,
            },
        )

        assert build_model(raw) == {
            "id": "c1",
            "email": "a@example.com",
            "_metadata": {"created": BASE_TIME},
        }

    def test_metadata_always_present(self) -> None:
        assert build_model(RawEntity(key=KEY, data={}))["_metadata"] == {}


class TestAttributeHelpers:
    """Tests for writable_attributes and preserved_fields."""

    def test_writable_attributes_drops_reserved(self) -> None:
        params = {
            "id": "forged",
            "email": "a@example.com",
            "password": "secret",
            "_hidden": {"identityProviderId": "x"},
            "_metadata": {"created": "x"},
            "_metadata_created": "x",
        }

        assert writable_attributes(params, "password") == {"email": "a@example.com"}

    def test_preserved_fields_skips_absent(self) -> None:
        raw = RawEntity(key=KEY, data={"_metadata_created": BASE_TIME})

        assert preserved_fields(raw, "_hidden", "_metadata_created") == {
            "_metadata_created": BASE_TIME
        }


class TestEntityStore:
    """Tests for EntityStore operations."""

    @pytest.mark.asyncio
    async def test_create_stamps_created(self, entities: EntityStore) -> None:
        entity = await entities.create(KEY, {"email": "a@example.com"})

        assert entity == {
            "id": "c1",
            "email": "a@example.com",
            "_metadata": {"created": BASE_TIME},
        }

    @pytest.mark.asyncio
    async def test_create_with_updated_tracking(self, entities: EntityStore) -> None:
        entity = await entities.create(KEY, {}, track_updated=True)

        assert entity["_metadata"] == {"created": BASE_TIME, "updated": BASE_TIME}

    @pytest.mark.asyncio
    async def test_create_existing_conflicts(self, entities: EntityStore) -> None:
        await entities.create(KEY, {})

        with pytest.raises(DocumentConflictError):
            await entities.create(KEY, {})

    @pytest.mark.asyncio
    async def test_get_returns_public_model(self, entities: EntityStore) -> None:
        await entities.create(KEY, {"_hidden": {"x": 1}, "city": "Oslo"})

        entity = await entities.get(KEY)

        assert entity == {"id": "c1", "city": "Oslo", "_metadata": {"created": BASE_TIME}}

    @pytest.mark.asyncio
    async def test_get_raw_keeps_internal_fields(self, entities: EntityStore) -> None:
        await entities.create(KEY, {"_hidden": {"x": 1}})

        raw = await entities.get_raw(KEY)

        assert raw.data["_hidden"] == {"x": 1}
        assert raw.data["_metadata_created"] == BASE_TIME

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, entities: EntityStore) -> None:
        with pytest.raises(EntityNotFoundError) as exc_info:
            await entities.get(KEY)

        assert exc_info.value.key == KEY

    @pytest.mark.asyncio
    async def test_get_missing_uses_factory(self, entities: EntityStore) -> None:
        with pytest.raises(CustomerNotFoundError, match='Customer "c1" not found.'):
            await entities.get(KEY, not_found=lambda key: CustomerNotFoundError("c1", key=key))

    @pytest.mark.asyncio
    async def test_update_overwrites(self, entities: EntityStore) -> None:
        await entities.create(KEY, {"a": 1, "b": 2})

        entity = await entities.update(KEY, {"a": 3})

        assert entity == {"id": "c1", "a": 3, "_metadata": {}}
        assert (await entities.get_raw(KEY)).data == {"a": 3}

    @pytest.mark.asyncio
    async def test_update_tracks_updated(self, entities: EntityStore) -> None:
        created = await entities.create(KEY, {}, track_updated=True)

        updated = await entities.update(
            KEY, {"_metadata_created": created["_metadata"]["created"]}, track_updated=True
        )

        assert updated["_metadata"]["created"] == BASE_TIME
        assert updated["_metadata"]["updated"] > BASE_TIME

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, entities: EntityStore) -> None:
        with pytest.raises(DocumentNotFoundError):
            await entities.update(KEY, {})

    @pytest.mark.asyncio
    async def test_delete(self, entities: EntityStore) -> None:
        await entities.create(KEY, {})
        await entities.delete(KEY)

        with pytest.raises(EntityNotFoundError):
            await entities.get(KEY)

    @pytest.mark.asyncio
    async def test_run_query(self, entities: EntityStore) -> None:
        await entities.create(KEY.child("Membership", "m2"), {"_hidden": 1})
        await entities.create(KEY.child("Membership", "m1"), {})

        results = await entities.run_query(
            Query("Membership").has_ancestor(KEY).order("_metadata_created")
        )

        assert [r["id"] for r in results] == ["m2", "m1"]
        assert all("_hidden" not in r for r in results)
