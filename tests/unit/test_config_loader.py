"""Tests for request and catalog file loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from panelnest.application.config import (
    ConfigError,
    load_catalog,
    load_config,
    load_config_from_dict,
)


def _write(tmp_path: Path, data, name: str = "request.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return path


PART = {
    "id": "side",
    "name": "Side",
    "materialType": "Plywood",
    "thickness": 18,
    "length": 720,
    "width": 560,
    "quantity": 2,
}


class TestLoadConfig:
    def test_valid_file(self, tmp_path) -> None:
        request = load_config(_write(tmp_path, {"cutting_list": [PART], "kerf": 3}))
        assert request.cutting_list[0].id == "side"
        assert request.kerf == 3

    def test_bare_list_is_cutting_list(self, tmp_path) -> None:
        request = load_config(_write(tmp_path, [PART]))
        assert len(request.cutting_list) == 1

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.json")
        assert exc_info.value.error_type == "file_not_found"

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "broken.json"
        path.write_text('{"cutting_list": [}')
        with pytest.raises(ConfigError) as exc_info:
            load_config(path)
        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] == 1

    def test_validation_error_has_path(self, tmp_path) -> None:
        bad = dict(PART, thickness="thick")
        path = _write(tmp_path, {"cutting_list": [bad]})

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        error = exc_info.value
        assert error.error_type == "validation"
        assert error.path == path
        assert error.details[0]["path"] == "cutting_list[0].thickness"
        assert "cutting_list[0].thickness" in str(error)


class TestLoadConfigFromDict:
    def test_dict(self) -> None:
        request = load_config_from_dict({"cuttingList": [PART], "sheetSize": "2440x1220"})
        assert request.stock_sheet.width == 1220

    def test_root_error_path(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict({"version": "9"})
        assert exc_info.value.details[0]["path"] == "version"
        assert exc_info.value.path is None


class TestLoadCatalog:
    ENTRY = {"id": "mdf", "type": "MDF", "thickness": 18, "length": 2440, "width": 1220}

    def test_list_file(self, tmp_path) -> None:
        catalog = load_catalog(_write(tmp_path, [self.ENTRY], "catalog.json"))
        assert catalog.lookup("MDF", 18) is not None

    def test_material_sheets_object(self, tmp_path) -> None:
        catalog = load_catalog(_write(tmp_path, {"materialSheets": [self.ENTRY]}, "catalog.json"))
        assert len(catalog) == 1

    def test_object_without_list(self, tmp_path) -> None:
        with pytest.raises(ConfigError, match="materialSheets"):
            load_catalog(_write(tmp_path, {"sheets": []}, "catalog.json"))

    def test_invalid_entry(self, tmp_path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_catalog(_write(tmp_path, [dict(self.ENTRY, length=0)], "catalog.json"))
        assert exc_info.value.details[0]["path"] == "[0].length"
        assert str(exc_info.value).startswith("Catalog validation failed")
