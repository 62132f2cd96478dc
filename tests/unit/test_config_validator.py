"""Tests for cutting checks on schema-valid configurations."""

from pathlib import Path

from linecut.application.config import (
    CutlistConfiguration,
    ValidationResult,
    load_config,
    validate_config,
)

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "configs"


def _config(**overrides) -> CutlistConfiguration:
    data = {"schema_version": "1.1", "parts": [{"length": 1000, "quantity": 2}]}
    data.update(overrides)
    return CutlistConfiguration.model_validate(data)


class TestValidationResult:
    def test_exit_codes(self) -> None:
        assert ValidationResult().exit_code == 0
        assert ValidationResult().add_warning("x", "w").exit_code == 2
        assert ValidationResult().add_error("x", "e").add_warning("y", "w").exit_code == 1

    def test_is_valid(self) -> None:
        result = ValidationResult().add_warning("x", "w")
        assert result.is_valid
        assert result.has_warnings


class TestValidateConfig:
    """Tests for validate_config."""

    def test_clean_config(self) -> None:
        result = validate_config(_config())
        assert result.is_valid
        assert result.warnings == []

    def test_empty_stock_is_error(self) -> None:
        result = validate_config(_config(stock_lengths=[]))
        assert not result.is_valid
        assert result.errors[0].message == "At least one stock length is required"

    def test_no_usable_stock_is_error(self) -> None:
        result = validate_config(load_config(FIXTURES_PATH / "no_usable_stock.json"))
        assert not result.is_valid
        assert any(
            "No stock length is longer than the unusable length" in e.message
            for e in result.errors
        )

    def test_unusable_stock_warning(self) -> None:
        result = validate_config(_config(stock_lengths=[6400, 60]))
        assert result.is_valid
        assert [w.path for w in result.warnings] == ["stock_lengths[1]"]
        assert "will never be used" in result.warnings[0].message

    def test_oversized_part_warning(self) -> None:
        result = validate_config(
            _config(parts=[{"length": 7000}], stock_lengths=[6400])
        )
        assert result.is_valid
        assert result.warnings[0].path == "parts[0].length"
        assert "will be left unpacked" in result.warnings[0].message

    def test_duplicate_lengths_warning(self) -> None:
        result = validate_config(
            _config(
                parts=[{"length": 500}, {"length": 500, "quantity": 3}],
                stock_lengths=[6400, 6400],
            )
        )
        paths = [w.path for w in result.warnings]
        assert paths == ["stock_lengths[1]", "parts[1].length"]
        assert all("listed more than once" in w.message for w in result.warnings)

    def test_fixture_with_warnings(self) -> None:
        result = validate_config(load_config(FIXTURES_PATH / "valid_with_warnings.json"))
        assert result.exit_code == 2
        assert len(result.warnings) == 3
