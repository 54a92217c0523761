"""Tests for the material sheet catalog."""

from __future__ import annotations

import json

import pytest

from panelnest.application import (
    DEFAULT_CATALOG_ENTRIES,
    STANDARD_SHEET_SIZES,
    CatalogEntry,
    MaterialSheetCatalog,
)
from panelnest.domain import SheetSize


@pytest.fixture
def catalog() -> MaterialSheetCatalog:
    return MaterialSheetCatalog.default()


class TestCatalogEntry:
    def test_matches_case_insensitively(self) -> None:
        entry = DEFAULT_CATALOG_ENTRIES[0]
        assert entry.matches("plywood", 18)
        assert entry.matches("PLYWOOD", 18.0000000001)
        assert not entry.matches("Plywood", 12)

    def test_rejects_bad_dimensions(self) -> None:
        with pytest.raises(ValueError, match="dimensions"):
            CatalogEntry("x", "X", "MDF", 18, length=0, width=100)
        with pytest.raises(ValueError, match="thickness"):
            CatalogEntry("x", "X", "MDF", 0, length=100, width=100)

    def test_to_stock_sheet(self) -> None:
        sheet = DEFAULT_CATALOG_ENTRIES[0].to_stock_sheet()
        assert (sheet.length, sheet.width) == (2440, 1220)
        assert sheet.name == "Plywood 18mm"
        assert sheet.cost_per_sheet == 52.75


class TestDefaultCatalog:
    def test_standard_sizes(self) -> None:
        assert STANDARD_SHEET_SIZES[0][1] == SheetSize(2440, 1220)
        assert len(STANDARD_SHEET_SIZES) == 6

    def test_lookup_prefers_first_standard_entry(self, catalog) -> None:
        sheet = catalog.lookup("Plywood", 18)
        assert sheet is not None
        assert (sheet.length, sheet.width) == (2440, 1220)

    def test_lookup_other_materials(self, catalog) -> None:
        assert catalog.lookup("MDF", 18).cost_per_sheet == 38.90
        assert catalog.lookup("melamine", 18).name == "White Melamine 18mm"
        assert catalog.lookup("Plywood", 12) is not None

    def test_lookup_unknown(self, catalog) -> None:
        assert catalog.lookup("Oak", 25) is None
        assert catalog.lookup("MDF", 12) is None

    def test_find_returns_all_matches(self, catalog) -> None:
        assert len(catalog.find("Plywood", 18)) == 5

    def test_material_types_in_catalog_order(self, catalog) -> None:
        assert list(catalog.material_types()) == ["Plywood", "MDF", "Melamine"]

    def test_to_json(self, catalog) -> None:
        data = json.loads(catalog.to_json())
        assert len(data) == len(catalog) == 8
        assert data[0]["id"] == "ply-18-2440-1220"


class TestCustomCatalog:
    def test_non_standard_entry_used_when_only_match(self) -> None:
        entry = CatalogEntry("oak", "Oak", "Oak", 25, 2000, 600, is_standard=False)
        sheet = MaterialSheetCatalog([entry]).lookup("Oak", 25)
        assert sheet is not None and sheet.name == "Oak"

    def test_standard_entry_beats_earlier_non_standard(self) -> None:
        catalog = MaterialSheetCatalog(
            [
                CatalogEntry("offcut", "Offcut", "MDF", 18, 1000, 500, is_standard=False),
                CatalogEntry("full", "Full", "MDF", 18, 2440, 1220),
            ]
        )
        assert catalog.lookup("MDF", 18).name == "Full"

    def test_from_file(self, tmp_path) -> None:
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps(
                [{"id": "birch", "materialType": "Birch", "thickness": 15,
                  "length": 2500, "width": 1250, "costPerSheet": 70}]
            )
        )
        catalog = MaterialSheetCatalog.from_file(path)

        assert len(catalog) == 1
        sheet = catalog.lookup("Birch", 15)
        assert sheet.cost_per_sheet == 70
        assert sheet.name == "birch"
