"""Pytest configuration and shared fixtures for nesting tests."""

from __future__ import annotations

import pytest

from panelnest.application import optimize_nesting
from panelnest.domain import (
    GrainDirection,
    NestingReport,
    PartSpec,
    PlaceableUnit,
    SheetSize,
    StockSheet,
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: end-to-end tests across the whole pipeline")
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


def _make_part(
    id: str = "p1",
    length: float = 800,
    width: float = 600,
    quantity: int = 1,
    grain: GrainDirection = GrainDirection.NONE,
    material_type: str = "Plywood",
    thickness: float = 18,
    name: str | None = None,
) -> PartSpec:
    """Build a cutting-list line with workshop defaults."""
    return PartSpec(
        id=id,
        name=name if name is not None else f"Part {id}",
        material_type=material_type,
        thickness=thickness,
        length=length,
        width=width,
        quantity=quantity,
        grain=grain,
    )


def _make_unit(
    unit_id: str = "p1#1",
    length: float = 800,
    width: float = 600,
    grain: GrainDirection = GrainDirection.NONE,
    material_type: str = "Plywood",
    thickness: float = 18,
) -> PlaceableUnit:
    """Build a single placeable unit."""
    return PlaceableUnit(
        unit_id=unit_id,
        parent_part_id=unit_id.split("#")[0],
        name=f"Unit {unit_id}",
        material_type=material_type,
        thickness=thickness,
        length=length,
        width=width,
        grain=grain,
    )


@pytest.fixture
def standard_sheet() -> StockSheet:
    """2440x1220 18mm plywood sheet."""
    return StockSheet(length=2440, width=1220, material_type="Plywood", thickness=18)


@pytest.fixture
def tall_sheet() -> StockSheet:
    """2100x2800 sheet, wider than it is long."""
    return StockSheet(length=2100, width=2800, material_type="Plywood", thickness=18)


@pytest.fixture
def kitchen_cutting_list() -> list[PartSpec]:
    """A small base-cabinet cutting list across three material groups."""
    return [
        _make_part("side", 720, 560, quantity=2, grain=GrainDirection.LENGTH, name="Side Panel"),
        _make_part("bottom", 764, 560, quantity=1, grain=GrainDirection.LENGTH, name="Bottom"),
        _make_part("shelf", 762, 540, quantity=2, name="Shelf"),
        _make_part("door", 715, 396, quantity=2, material_type="Melamine", name="Door"),
        _make_part("back", 764, 720, quantity=1, thickness=12, name="Back Panel"),
    ]


@pytest.fixture
def make_part():
    """Factory for cutting-list lines."""
    return _make_part


@pytest.fixture
def make_unit():
    """Factory for placeable units."""
    return _make_unit


@pytest.fixture
def simple_report() -> NestingReport:
    """Two 800x600 grain-length sides on one 2440x1220 plywood sheet."""
    return optimize_nesting(
        [_make_part("side", 800, 600, quantity=2, grain=GrainDirection.LENGTH, name="Side Panel")]
    )


@pytest.fixture
def rotated_report() -> NestingReport:
    """A grain-length part that only fits a 2100x2800 sheet turned."""
    return optimize_nesting(
        [_make_part("tall", 2500, 600, grain=GrainDirection.LENGTH, name="Tall Side")],
        SheetSize(2100, 2800),
    )


@pytest.fixture
def kitchen_report(kitchen_cutting_list: list[PartSpec]) -> NestingReport:
    return optimize_nesting(kitchen_cutting_list)
