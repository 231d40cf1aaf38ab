"""Per-provider model records: envelope validation and record merging."""

from __future__ import annotations

import pytest

from model_picker.base.catalog import CatalogPersistence, ProviderModelRecord, provider_models_key
from model_picker.base.errors import PersistenceError
from model_picker.base.models import ModelConfig, ModelOrigin
from model_picker.persistence.memory import MemoryKeyValueStore


def _api_model(mid: str, **kw) -> ModelConfig:
    return ModelConfig(id=mid, display_name=kw.pop("display_name", mid), origin=ModelOrigin.API, **kw)


@pytest.mark.asyncio
async def test_save_then_load_round_trip():
    store = MemoryKeyValueStore()
    persistence = CatalogPersistence(store)
    record = ProviderModelRecord(models=(_api_model("m1", discovered_at=10.0),), removed=("old",), hidden=("m1",))
    await persistence.save("p", record)

    raw = await store.get("models:p")
    assert raw == {
        "version": 1,
        "models": [{"id": "m1", "display_name": "m1", "origin": "api", "discovered_at": 10.0}],
        "removed": ["old"],
        "hidden": ["m1"],
    }
    assert await persistence.load("p") == record


@pytest.mark.asyncio
async def test_missing_record_is_empty():
    assert await CatalogPersistence(MemoryKeyValueStore()).load("p") == ProviderModelRecord()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "raw",
    [
        ["not", "an", "envelope"],
        {"version": 99, "models": [], "removed": []},
        {"version": 1, "models": [{"display_name": "missing id"}]},
        {"models": []},
    ],
)
async def test_malformed_records_are_treated_as_empty(raw):
    store = MemoryKeyValueStore({provider_models_key("p"): raw})
    assert await CatalogPersistence(store).load("p") == ProviderModelRecord()


@pytest.mark.asyncio
async def test_store_failures_raise_persistence_error(failing_store_cls):
    persistence = CatalogPersistence(failing_store_cls(fail_reads=True, fail_writes=True))
    with pytest.raises(PersistenceError) as info:
        await persistence.load("p")
    assert info.value.provider == "p"
    with pytest.raises(PersistenceError):
        await persistence.save("p", ProviderModelRecord())
    with pytest.raises(PersistenceError):
        await persistence.delete("p")


def test_with_models_updates_in_place_and_appends():
    record = ProviderModelRecord(models=(_api_model("a", discovered_at=1.0), _api_model("b")))
    merged = record.with_models([_api_model("c"), _api_model("a", display_name="A!", context_length=8, discovered_at=5.0)])
    assert [m.id for m in merged.models] == ["a", "b", "c"]
    assert merged.models[0].display_name == "A!"
    assert merged.models[0].context_length == 8
    assert merged.models[0].discovered_at == 1.0


def test_removed_bookkeeping():
    record = ProviderModelRecord().mark_removed("x").mark_removed("x").mark_removed("y")
    assert record.removed == ("x", "y")
    assert record.is_removed("x")
    assert record.restore("x").removed == ("y",)
    assert record.restore("zzz") is record


@pytest.mark.asyncio
async def test_record_without_hidden_list_loads():
    store = MemoryKeyValueStore({provider_models_key("p"): {"version": 1, "models": [], "removed": ["x"]}})
    record = await CatalogPersistence(store).load("p")
    assert record.removed == ("x",)
    assert record.hidden == ()


def test_visibility_bookkeeping():
    record = ProviderModelRecord().with_visibility("x", False)
    assert record.with_visibility("x", False) is record
    assert record.is_hidden("x")
    assert record.apply_visibility(ModelConfig(id="x", display_name="X")).visible is False
    assert record.apply_visibility(ModelConfig(id="y", display_name="Y")).visible is None
    shown = record.with_visibility("x", True)
    assert shown.hidden == ()
    assert shown.with_visibility("x", True) is shown
