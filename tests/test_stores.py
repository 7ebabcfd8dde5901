import json

import pytest

from app.core.errors import UnreachableError
from app.data.seed_mappings import SEED_MAPPINGS
from app.models.query import QueryDescriptor
from app.stores.embedded_store import EmbeddedMappingStore
from app.stores.file_store import JsonFileMappingStore
from conftest import as_create, make_mapping


@pytest.fixture
def file_store(tmp_path, two_mappings):
    path = tmp_path / "mappings.json"
    path.write_text(json.dumps(two_mappings), encoding="utf-8")
    return JsonFileMappingStore(path)


@pytest.fixture(params=["embedded", "file"])
def store(request, embedded_store, file_store):
    return embedded_store if request.param == "embedded" else file_store


@pytest.mark.asyncio
async def test_category_filter_with_limit_one(store):
    result = await store.find(QueryDescriptor(category="Ayurveda", page=1, limit=1))
    assert [r.namaste_code for r in result.records] == ["AYU-001"]
    assert result.total == 2


@pytest.mark.asyncio
async def test_token_matches_term_gloss(store):
    result = await store.find(QueryDescriptor(tokens=("cough",)))
    assert [r.namaste_code for r in result.records] == ["AYU-001"]
    assert result.total == 1


@pytest.mark.asyncio
async def test_min_confidence_filter(store):
    result = await store.find(QueryDescriptor(min_confidence=0.94))
    assert [r.namaste_code for r in result.records] == ["AYU-001"]
    assert result.total == 1


@pytest.mark.asyncio
async def test_page_beyond_data(store):
    result = await store.find(QueryDescriptor(page=5, limit=20))
    assert result.records == []
    assert result.total == 2


@pytest.mark.asyncio
async def test_insert_reports_duplicates_and_keeps_original(store):
    report = await store.insert_many(
        as_create([make_mapping("AYU-001", 0.10, namaste_term="Replacement"), make_mapping("AYU-003", 0.88)])
    )
    assert report.inserted == ["AYU-003"]
    assert report.rejected_codes == ["AYU-001"]
    assert "already exists" in report.rejected[0].reason

    original = await store.get_by_code("AYU-001")
    assert original.namaste_term == "Kasa (Cough)"
    assert original.confidence_score == 0.95

    inserted = await store.get_by_code("AYU-003")
    assert inserted.created_at is not None
    assert inserted.updated_at == inserted.created_at


@pytest.mark.asyncio
async def test_duplicates_within_one_batch(store):
    report = await store.insert_many(as_create([make_mapping("AYU-050", 0.5), make_mapping("AYU-050", 0.6)]))
    assert report.inserted == ["AYU-050"]
    assert report.rejected_codes == ["AYU-050"]
    assert (await store.get_by_code("AYU-050")).confidence_score == 0.5


@pytest.mark.asyncio
async def test_get_by_code_missing(store):
    assert await store.get_by_code("NOPE-1") is None


@pytest.mark.asyncio
async def test_clear_and_stats(store):
    stats = await store.stats()
    assert stats.total_records == 2
    assert stats.avg_confidence == pytest.approx(0.94)
    assert stats.categories == {"Ayurveda"}
    assert stats.chapters == {"Respiratory System Disorders"}

    assert await store.clear() == 2
    assert (await store.find(QueryDescriptor())).total == 0
    assert (await store.stats()).total_records == 0


@pytest.mark.asyncio
async def test_file_store_persists_mutations(tmp_path, file_store):
    await file_store.insert_many(as_create([make_mapping("UNA-001", 0.7, category="Unani")]))

    reopened = JsonFileMappingStore(file_store.path)
    result = await reopened.find(QueryDescriptor())
    assert [r.namaste_code for r in result.records] == ["AYU-001", "AYU-002", "UNA-001"]
    assert (await reopened.get_by_code("UNA-001")).created_at is not None


@pytest.mark.asyncio
async def test_file_store_missing_file_is_empty_and_created_on_write(tmp_path):
    path = tmp_path / "nested" / "mappings.json"
    store = JsonFileMappingStore(path)
    assert (await store.find(QueryDescriptor())).total == 0

    await store.insert_many(as_create([make_mapping("AYU-001", 0.9)]))
    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8"))[0]["namaste_code"] == "AYU-001"


@pytest.mark.asyncio
async def test_file_store_corrupt_file_is_unreachable(tmp_path):
    path = tmp_path / "mappings.json"
    path.write_text("[{\"namaste_code\": ", encoding="utf-8")
    store = JsonFileMappingStore(path)
    with pytest.raises(UnreachableError) as exc_info:
        await store.find(QueryDescriptor())
    assert exc_info.value.kind == "unreachable"


@pytest.mark.asyncio
async def test_embedded_store_seeded_with_sample_set():
    store = EmbeddedMappingStore(seed=SEED_MAPPINGS)
    stats = await store.stats()
    assert stats.total_records == 15
    assert stats.categories == {"Ayurveda", "Siddha", "Unani"}

    result = await store.find(QueryDescriptor(limit=3))
    assert [r.namaste_code for r in result.records] == ["AYU-006", "AYU-001", "SID-001"]


@pytest.mark.asyncio
async def test_unmapped_placeholder_is_distinguishable(store):
    await store.insert_many(as_create([make_mapping("AYU-099", 0.1, icd11_tm2_code="")]))
    placeholder = await store.get_by_code("AYU-099")
    assert placeholder.icd11_tm2_code == ""
    assert not placeholder.is_mapped
    assert (await store.get_by_code("AYU-001")).is_mapped
