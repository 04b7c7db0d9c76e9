# File: tests/test_config.py

"""Tests for settings loading."""

import pytest

from mass_timber_designer.config import CalculatorSettings, load_settings


class TestLoadSettings:

    def test_packaged_defaults(self) -> None:
        settings = load_settings()
        assert settings.grade == "ML38"
        assert settings.safety_factor == 1.5
        assert settings.deflection_limit == 300
        assert settings.joist_spacing_mm == 800
        assert settings.max_bay_span == 9.0
        assert settings.catalog_path is None
        assert settings.rates.beam_rate == 3200.0
        assert settings.rates.joist_rates["165x270"] == 390.0

    def test_yaml_file(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(
            "grade: GL21\n"
            "max_bay_span: 8\n"
            "deflection_limit: null\n"
            "rates:\n"
            "  beam_rate: 3500\n"
        )
        settings = load_settings(path)
        assert settings.grade == "GL21"
        assert settings.max_bay_span == 8.0
        assert settings.deflection_limit is None
        assert settings.rates.beam_rate == 3500.0
        assert settings.rates.column_rate == 3200.0

    def test_dict_input(self) -> None:
        settings = load_settings({"safety_factor": 1.2})
        assert settings.safety_factor == 1.2
        assert settings.grade == "ML38"

    def test_empty_file(self, tmp_path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("")
        assert load_settings(path) == CalculatorSettings()

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yaml")

    @pytest.mark.parametrize("config, message", [
        ({"colour": "red"}, "Unknown setting"),
        ({"grade": "ML99"}, "Unknown grade"),
        ({"safety_factor": 0}, "safety_factor"),
        ({"deflection_limit": -300}, "deflection_limit"),
    ])
    def test_invalid(self, config, message) -> None:
        with pytest.raises(ValueError, match=message):
            load_settings(config)

    def test_bad_input_type(self) -> None:
        with pytest.raises(TypeError):
            load_settings(42)
