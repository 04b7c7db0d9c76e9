# File: tests/test_structure.py

"""Tests for the whole-structure calculation.

Reference building: 20 m x 15 m, 4 floors at 3.5 m, 4 x 3 bays of 5 m,
2 kPa residential load, no fire rating, ML38, joists at 800 mm running
lengthwise, L/300, safety factor 1.5.
"""

import pytest

from mass_timber_designer.catalog import BEAM, COLUMN, JOIST, Section, SizeCatalog
from mass_timber_designer.config import load_settings
from mass_timber_designer.costing import RateTable
from mass_timber_designer.fire_resistance import FIRE_RATINGS
from mass_timber_designer.geometry import member_volume
from mass_timber_designer.structure import BuildingInputs, calculate_structure


@pytest.fixture
def inputs() -> BuildingInputs:
    return BuildingInputs(
        building_length=20.0,
        building_width=15.0,
        num_floors=4,
        floor_height=3.5,
        lengthwise_bays=4,
        widthwise_bays=3,
        load=2.0,
    )


@pytest.fixture
def result(inputs, catalog):
    return calculate_structure(inputs, catalog)


# =============================================================================
# Member sizes
# =============================================================================


class TestReferenceBuilding:

    def test_member_sizes(self, result) -> None:
        assert result.joist.label == "120x200"
        assert result.interior_beam.label == "120x620"
        assert result.edge_beam.label == "120x480"
        assert result.column.label == "120x200"

    def test_spans(self, result) -> None:
        assert result.joist.span == 5.0
        assert result.interior_beam.span == 5.0

    def test_column_load(self, result) -> None:
        assert result.column.axial_load == pytest.approx(2.0 * 25.0 * 4 + 0.756)

    def test_clean_result(self, result) -> None:
        assert result.warnings == ()
        assert result.errors == []
        assert not result.using_fallback


class TestQuantities:

    def test_counts(self, result) -> None:
        assert result.counts.beams == 4 * 4 * 4
        assert result.counts.columns == 20

    def test_volumes(self, result) -> None:
        volumes = result.volumes
        joist = result.joist
        assert volumes.joists == pytest.approx(
            member_volume(joist.width, joist.depth, 15.0, result.counts.joists)
        )
        assert volumes.interior_beams == pytest.approx(0.12 * 0.62 * 20.0 * 2 * 4)
        assert volumes.edge_beams == pytest.approx(0.12 * 0.48 * 20.0 * 2 * 4)
        assert volumes.columns == pytest.approx(0.12 * 0.2 * 14.0 * 20)
        assert volumes.total == pytest.approx(
            volumes.joists + volumes.beams + volumes.columns
        )

    def test_weight_and_carbon(self, result) -> None:
        assert result.timber_weight == pytest.approx(result.volumes.total * 600.0)
        assert result.carbon.volume == pytest.approx(result.volumes.total)

    def test_cost(self, result) -> None:
        assert result.joist_area == 1200.0
        assert result.cost.joists.cost == pytest.approx(1200.0 * 390.0)
        assert result.cost.beams.cost == pytest.approx(result.volumes.beams * 3200.0)
        assert result.cost.columns.cost == pytest.approx(result.volumes.columns * 3200.0)

    def test_custom_rates(self, inputs, catalog) -> None:
        rates = RateTable(beam_rate=1.0, column_rate=1.0, joist_rates={"120x200": 1.0})
        result = calculate_structure(inputs, catalog, rates)
        assert result.cost.total == pytest.approx(
            result.volumes.beams + result.volumes.columns + 1200.0
        )


# =============================================================================
# Cross-member rules and degraded paths
# =============================================================================


class TestCoupling:

    @pytest.mark.parametrize("rating", FIRE_RATINGS)
    @pytest.mark.parametrize("floors", [1, 3, 8])
    def test_column_width_matches_interior_beam(self, catalog, rating, floors) -> None:
        inputs = BuildingInputs(24.0, 18.0, num_floors=floors, lengthwise_bays=4,
                                widthwise_bays=3, load=3.0, fire_rating=rating)
        result = calculate_structure(inputs, catalog)
        assert result.errors == []
        assert result.column.width == result.interior_beam.width

    def test_joist_direction_swaps_spans(self, catalog) -> None:
        inputs = BuildingInputs(24.0, 12.0, lengthwise_bays=4, widthwise_bays=3,
                                joists_run_lengthwise=False)
        result = calculate_structure(inputs, catalog)
        assert result.joist.span == 6.0
        assert result.interior_beam.span == 4.0
        assert result.interior_beam.tributary_width == 6.0


class TestWarningsAndFallbacks:

    def test_spans_over_policy_warn_but_calculate(self, catalog) -> None:
        inputs = BuildingInputs(30.0, 10.0, lengthwise_bays=3, widthwise_bays=1)
        result = calculate_structure(inputs, catalog)
        assert len(result.warnings) == 2
        assert "joist span" in result.warnings[0]
        assert "beam span" in result.warnings[1]
        assert result.errors == []
        assert result.joist.depth >= 410

    def test_max_bay_span_from_settings(self, catalog) -> None:
        settings = load_settings({"max_bay_span": 4.0})
        inputs = BuildingInputs.from_settings(settings, building_length=20.0,
                                              building_width=15.0, lengthwise_bays=4,
                                              widthwise_bays=3)
        assert inputs.max_bay_span == 4.0
        assert len(calculate_structure(inputs, catalog).warnings) == 2

    def test_custom_bays(self, catalog) -> None:
        inputs = BuildingInputs(20.0, 15.0, lengthwise_bays=2, widthwise_bays=3,
                                custom_lengthwise_bays=(8.0, 12.0),
                                custom_widthwise_bays=(5.0, 5.0, 5.0))
        result = calculate_structure(inputs, catalog)
        assert result.bays.lengthwise_bays == (8.0, 12.0)
        assert result.interior_beam.span == 12.0
        assert any("beam span" in w for w in result.warnings)

    def test_empty_catalog_flags_approximate(self, inputs, empty_catalog) -> None:
        result = calculate_structure(inputs, empty_catalog)
        assert result.using_fallback
        assert any("approximate" in w for w in result.warnings)
        assert result.errors == []

    def test_invalid_load_gives_nominal_members(self, catalog) -> None:
        result = calculate_structure(BuildingInputs(20.0, 15.0, load=0.0), catalog)
        assert len(result.errors) == 4
        assert result.joist.label == "165x270"
        assert result.interior_beam.label == "205x335"
        assert result.column.label == "335x335"

    def test_zero_floors_treated_as_one(self, catalog) -> None:
        result = calculate_structure(BuildingInputs(20.0, 15.0, num_floors=0), catalog)
        assert result.errors == []
        assert result.joist_area == 300.0

    def test_unknown_grade_raises(self, catalog) -> None:
        with pytest.raises(ValueError):
            calculate_structure(BuildingInputs(20.0, 15.0, grade="XX"), catalog)


# =============================================================================
# Output tables and tracing
# =============================================================================


class TestOutputs:

    def test_member_table(self, result) -> None:
        table = result.member_table()
        assert list(table["Member"]) == ["Joist", "Interior beam", "Edge beam", "Column"]
        assert list(table["Size (mm)"]) == ["120x200", "120x620", "120x480", "120x200"]
        assert table.loc[0, "Governing"] == "Deflection"
        assert table.loc[3, "Governing"] == "Compression"

    def test_quantities_table(self, result) -> None:
        table = result.quantities_table()
        assert list(table["Element"]) == ["Joists", "Beams", "Columns"]
        assert table.loc[2, "Count"] == 20

    def test_trace_hook(self, inputs, catalog, result) -> None:
        events = []
        traced = calculate_structure(inputs, catalog, trace=events.append)
        stages = [e.stage for e in events]
        assert stages[0] == "structure.bays"
        assert stages[-1] == "structure.volumes"
        assert stages.count("beam.size") == 2
        assert "column.size" in stages
        assert traced == result


# =============================================================================
# Custom bays per axis and column catalog coverage
# =============================================================================


class TestCustomBaysPerAxis:

    def test_lengthwise_only(self, catalog) -> None:
        inputs = BuildingInputs(20.0, 15.0, lengthwise_bays=2, widthwise_bays=3,
                                custom_lengthwise_bays=(5.0, 15.0))
        bays = inputs.bay_geometry()
        assert bays.lengthwise_bays == (5.0, 15.0)
        assert bays.widthwise_bays == (5.0, 5.0, 5.0)
        assert calculate_structure(inputs, catalog).interior_beam.span == 15.0

    def test_widthwise_only(self) -> None:
        inputs = BuildingInputs(20.0, 15.0, lengthwise_bays=4, widthwise_bays=2,
                                custom_widthwise_bays=(6.0, 9.0))
        bays = inputs.bay_geometry()
        assert bays.lengthwise_bays == (5.0, 5.0, 5.0, 5.0)
        assert bays.widthwise_bays == (6.0, 9.0)


class TestColumnCatalogCoverage:

    def test_columns_in_catalog(self, inputs, catalog) -> None:
        result = calculate_structure(inputs, catalog)
        assert catalog.contains(result.column.width, result.column.depth, COLUMN)

    def test_beam_width_missing_from_columns_is_flagged(self, inputs) -> None:
        catalog = SizeCatalog.from_sections(
            [Section(120, d, JOIST) for d in (200, 270, 335, 410)]
            + [Section(120, d, BEAM) for d in (270, 335, 410, 480, 550, 620, 690, 760, 830)]
            + [Section(200, d, COLUMN) for d in (200, 300, 400)]
        )
        result = calculate_structure(inputs, catalog)
        assert result.column.width == result.interior_beam.width == 120
        assert not catalog.contains(result.column.width, result.column.depth, COLUMN)
        assert result.column.using_fallback
        assert result.warnings == ("Column size is approximate (no matching catalog section)",)
