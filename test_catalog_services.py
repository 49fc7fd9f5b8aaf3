"""Tests de las reglas de consistencia del catálogo (categoría → marca → perfume)."""

from types import SimpleNamespace

from perfume_catalog.crud import brand_crud, category_crud
from perfume_catalog.schemas.brand_schema import BrandCreate, BrandUpdate
from perfume_catalog.schemas.category_schema import CategoryCreate, CategoryUpdate
from perfume_catalog.schemas.perfume_schema import PerfumeCreate, PerfumeSearchRequest, PerfumeUpdate
from perfume_catalog.services.brand_service import BrandService
from perfume_catalog.services.category_service import CategoryService
from perfume_catalog.services.perfume_service import PerfumeService
from perfume_catalog.services.result import ErrorKind

categories = CategoryService()
brands = BrandService()
perfumes = PerfumeService()


async def _category(db, name="Woody", color="#8B4513"):
    result = await categories.create_new_category(db, CategoryCreate(name=name, color=color))
    assert result.ok, result.error
    return result.value


async def _brand(db, category_id, name="Oakmoss"):
    result = await brands.create_new_brand(db, BrandCreate(name=name, category_id=category_id))
    assert result.ok, result.error
    return result.value


async def _perfume(db, brand_id, name="No.5", number=5):
    result = await perfumes.create_new_perfume(db, PerfumeCreate(name=name, number=number, brand_id=brand_id))
    assert result.ok, result.error
    return result.value


# ─────────────────────────────────────────────────────────────────────────────
# Categorías
# ─────────────────────────────────────────────────────────────────────────────
async def test_category_round_trip(db):
    created = await categories.create_new_category(
        db, CategoryCreate(name="Citrus", description="Fresh and bright", color="#FFD700")
    )
    fetched = await categories.get_category_by_id(db, created.value.id)

    assert fetched.ok
    assert (fetched.value.name, fetched.value.description, fetched.value.color) == (
        "Citrus",
        "Fresh and bright",
        "#FFD700",
    )


async def test_duplicate_category_name_is_rejected(db):
    first = await categories.create_new_category(db, CategoryCreate(name="Woody", color="brown"))
    second = await categories.create_new_category(db, CategoryCreate(name="Woody", color="green"))

    assert first.ok
    assert second.error.kind is ErrorKind.DUPLICATE_NAME


async def test_category_update_keeps_own_name_but_not_others(db):
    woody = await _category(db, "Woody")
    await _category(db, "Floral")

    same_name = await categories.update_existing_category(
        db, woody.id, CategoryUpdate(name="Woody", description="Updated", color="brown")
    )
    taken = await categories.update_existing_category(db, woody.id, CategoryUpdate(name="Floral", color="pink"))
    missing = await categories.update_existing_category(db, 999, CategoryUpdate(name="Other", color="x"))

    assert same_name.ok and same_name.value.description == "Updated"
    assert taken.error.kind is ErrorKind.DUPLICATE_NAME
    assert missing.error.kind is ErrorKind.NOT_FOUND


async def test_storage_unique_violation_is_remapped(db, monkeypatch):
    await _category(db, "Woody")

    # Simula una carrera: la comprobación previa no ve la categoría existente
    async def nobody_has_that_name(db, name):
        return None

    monkeypatch.setattr(category_crud, "get_category_by_name", nobody_has_that_name)
    result = await categories.create_new_category(db, CategoryCreate(name="Woody", color="brown"))

    assert result.error.kind is ErrorKind.DUPLICATE_NAME
    assert len(await categories.get_all_categories(db)) == 1


async def test_category_delete_is_guarded_by_brands(db):
    woody = await _category(db)
    brand = await _brand(db, woody.id)

    blocked = await categories.delete_existing_category(db, woody.id)
    assert blocked.error.kind is ErrorKind.HAS_DEPENDENTS
    assert (await categories.get_category_by_id(db, woody.id)).ok

    assert (await brands.delete_existing_brand(db, brand.id)).ok
    assert (await categories.delete_existing_category(db, woody.id)).ok
    assert (await categories.get_category_by_id(db, woody.id)).error.kind is ErrorKind.NOT_FOUND


async def test_delete_missing_category(db):
    result = await categories.delete_existing_category(db, 42)

    assert result.error.kind is ErrorKind.NOT_FOUND


async def test_foreign_key_blocks_delete_when_guard_is_bypassed(db, monkeypatch):
    woody = await _category(db)
    await _brand(db, woody.id)
    # El rollback expira los objetos de la sesión
    woody_id = woody.id

    # Simula una marca creada entre la comprobación y el borrado
    async def category_seen_without_brands(db, category_id):
        return SimpleNamespace(id=category_id, brands=[])

    monkeypatch.setattr(category_crud, "get_category_with_brands", category_seen_without_brands)
    result = await categories.delete_existing_category(db, woody_id)

    assert result.error.kind is ErrorKind.HAS_DEPENDENTS
    assert len(await brand_crud.get_brands_by_category(db, woody_id)) == 1


# ─────────────────────────────────────────────────────────────────────────────
# Marcas
# ─────────────────────────────────────────────────────────────────────────────
async def test_brand_name_is_scoped_per_category(db):
    woody = await _category(db, "Woody")
    floral = await _category(db, "Floral")
    await _brand(db, woody.id, "Oakmoss")

    same_category = await brands.create_new_brand(db, BrandCreate(name="Oakmoss", category_id=woody.id))
    other_category = await brands.create_new_brand(db, BrandCreate(name="Oakmoss", category_id=floral.id))

    assert same_category.error.kind is ErrorKind.DUPLICATE_NAME
    assert other_category.ok
    assert other_category.value.category_name == "Floral"


async def test_brand_requires_existing_category(db):
    result = await brands.create_new_brand(db, BrandCreate(name="Orphan", category_id=404))

    assert result.error.kind is ErrorKind.REFERENCE_NOT_FOUND


async def test_brand_move_checks_uniqueness_in_target_category(db):
    woody = await _category(db, "Woody")
    floral = await _category(db, "Floral")
    moving = await _brand(db, woody.id, "Rosewood")
    await _brand(db, floral.id, "Rosewood")
    other = await _brand(db, woody.id, "Cedar")

    clash = await brands.update_existing_brand(db, moving.id, BrandUpdate(name="Rosewood", category_id=floral.id))
    moved = await brands.update_existing_brand(db, other.id, BrandUpdate(name="Cedar", category_id=floral.id))

    assert clash.error.kind is ErrorKind.DUPLICATE_NAME
    assert moved.ok
    assert moved.value.category_id == floral.id
    assert moved.value.category_name == "Floral"


async def test_brand_delete_is_guarded_by_perfumes(db):
    woody = await _category(db)
    brand = await _brand(db, woody.id)
    perfume = await _perfume(db, brand.id)

    assert (await brands.delete_existing_brand(db, brand.id)).error.kind is ErrorKind.HAS_DEPENDENTS

    assert (await perfumes.delete_existing_perfume(db, perfume.id)).ok
    assert (await brands.delete_existing_brand(db, brand.id)).ok


async def test_brands_by_category(db):
    woody = await _category(db, "Woody")
    floral = await _category(db, "Floral")
    await _brand(db, woody.id, "Oakmoss")
    await _brand(db, floral.id, "Peony")

    listed = await brands.get_brands_by_category(db, woody.id)

    assert [brand.name for brand in listed] == ["Oakmoss"]
    assert await brands.get_brands_by_category(db, 999) == []


# ─────────────────────────────────────────────────────────────────────────────
# Perfumes
# ─────────────────────────────────────────────────────────────────────────────
async def test_perfume_carries_brand_and_category_names(db):
    woody = await _category(db)
    brand = await _brand(db, woody.id)
    perfume = await _perfume(db, brand.id)

    assert perfume.brand_name == "Oakmoss"
    assert perfume.category_id == woody.id
    assert perfume.category_name == "Woody"


async def test_perfume_requires_existing_brand(db):
    created = await perfumes.create_new_perfume(db, PerfumeCreate(name="Ghost", number=1, brand_id=77))

    assert created.error.kind is ErrorKind.REFERENCE_NOT_FOUND
    assert created.error.message == "Brand not found with ID: 77"


async def test_perfume_update_can_change_brand(db):
    woody = await _category(db)
    oakmoss = await _brand(db, woody.id, "Oakmoss")
    cedar = await _brand(db, woody.id, "Cedar")
    perfume = await _perfume(db, oakmoss.id)

    updated = await perfumes.update_existing_perfume(
        db, perfume.id, PerfumeUpdate(name="No.5 Intense", number=6, brand_id=cedar.id)
    )
    missing_brand = await perfumes.update_existing_perfume(
        db, perfume.id, PerfumeUpdate(name="No.5", number=5, brand_id=999)
    )

    assert updated.ok
    assert (updated.value.name, updated.value.number, updated.value.brand_name) == ("No.5 Intense", 6, "Cedar")
    assert missing_brand.error.kind is ErrorKind.REFERENCE_NOT_FOUND


async def test_perfumes_by_category_cross_brands(db):
    woody = await _category(db, "Woody")
    floral = await _category(db, "Floral")
    oakmoss = await _brand(db, woody.id, "Oakmoss")
    cedar = await _brand(db, woody.id, "Cedar")
    peony = await _brand(db, floral.id, "Peony")
    await _perfume(db, oakmoss.id, "Forest", 1)
    await _perfume(db, cedar.id, "Bark", 2)
    await _perfume(db, peony.id, "Petal", 3)

    woody_perfumes = await perfumes.get_perfumes_by_category(db, woody.id)
    cedar_perfumes = await perfumes.get_perfumes_by_brand(db, cedar.id)

    assert [p.name for p in woody_perfumes] == ["Forest", "Bark"]
    assert [p.name for p in cedar_perfumes] == ["Bark"]


# ─────────────────────────────────────────────────────────────────────────────
# Búsqueda
# ─────────────────────────────────────────────────────────────────────────────
async def _search_fixture(db):
    woody = await _category(db, "Woody")
    oakmoss = await _brand(db, woody.id, "Oakmoss")
    citrine = await _brand(db, woody.id, "Citrine House")
    await _perfume(db, oakmoss.id, "Forest Walk", 10)
    await _perfume(db, oakmoss.id, "Dark Oak", 20)
    await _perfume(db, citrine.id, "Morning Light", 30)


async def _search(db, **filters):
    return [p.name for p in await perfumes.search_and_filter(db, PerfumeSearchRequest(**filters))]


async def test_search_without_filters_returns_everything_by_id(db):
    await _search_fixture(db)

    assert await _search(db) == ["Forest Walk", "Dark Oak", "Morning Light"]


async def test_search_term_matches_perfume_or_brand_case_insensitive(db):
    await _search_fixture(db)

    assert await _search(db, search_term="OAK") == ["Forest Walk", "Dark Oak"]
    assert await _search(db, search_term="light") == ["Morning Light"]


async def test_brand_name_filter_and_inclusive_range(db):
    await _search_fixture(db)

    assert await _search(db, brand_name="citrine") == ["Morning Light"]
    assert await _search(db, min_number=10, max_number=20) == ["Forest Walk", "Dark Oak"]
    assert await _search(db, brand_name="oakmoss", min_number=15) == ["Dark Oak"]


async def test_blank_terms_are_ignored_and_inverted_range_is_empty(db):
    await _search_fixture(db)

    assert await _search(db, search_term="   ", brand_name="") == ["Forest Walk", "Dark Oak", "Morning Light"]
    assert await _search(db, min_number=25, max_number=5) == []


async def test_search_shortcuts(db):
    await _search_fixture(db)

    by_term = await perfumes.search_by_term(db, "oak")
    by_brand = await perfumes.find_by_brand_name(db, "Oakmoss")
    by_range = await perfumes.find_by_number_range(db, 20, 30)

    assert [p.name for p in by_term] == ["Forest Walk", "Dark Oak"]
    assert [p.name for p in by_brand] == ["Forest Walk", "Dark Oak"]
    assert [p.name for p in by_range] == ["Dark Oak", "Morning Light"]


async def test_brand_name_lookup_is_exact(db):
    await _search_fixture(db)

    assert await perfumes.find_by_brand_name(db, "oakmoss") == []
    assert await perfumes.find_by_brand_name(db, "Oak") == []
