"""Tests for option resolution and loading."""

import pytest

from deepcompare import (
    CompareOptions,
    CycleHandling,
    FilterMode,
    OptionsError,
    PathFilter,
    load_options,
    resolve_options,
)


class TestResolveOptions:
    """Test option resolution."""

    def test_defaults(self):
        """Test missing options resolve to the defaults."""
        options = resolve_options(None)
        assert options == CompareOptions()
        assert options.strict is True
        assert options.cycle_handling == CycleHandling.ERROR
        assert options.path_filter is None
        assert options.max_depth == 100

    def test_passthrough(self):
        """Test resolved options are returned unchanged."""
        options = CompareOptions(strict=False)
        assert resolve_options(options) is options

    def test_camel_case(self):
        """Test camelCase option names."""
        options = resolve_options({
            "strict": False,
            "circularReferences": "ignore",
            "pathFilter": {"patterns": [".id"], "mode": "include"},
            "schemaValidation": {"firstObjectSchema": {"id": "number"}},
        })
        assert options.strict is False
        assert options.cycle_handling == CycleHandling.IGNORE
        assert options.path_filter == PathFilter((".id",), FilterMode.INCLUDE)
        assert options.schema_validation.first_schema == {"id": "number"}
        assert options.schema_validation.throw_on_failure is False

    def test_filter_mode_defaults_to_exclude(self):
        """Test an omitted filter mode means exclude."""
        options = resolve_options({"path_filter": {"patterns": ["a"]}})
        assert options.path_filter.mode == FilterMode.EXCLUDE

    @pytest.mark.parametrize("raw", [
        {"unknown": 1},
        {"cycle_handling": "sometimes"},
        {"path_filter": {"patterns": ["a"], "mode": "both"}},
        {"path_filter": {"patterns": "a"}},
        {"max_depth": -1},
        {"schema_validation": {"first": {}}},
    ])
    def test_invalid(self, raw):
        """Test invalid options raise OptionsError."""
        with pytest.raises(OptionsError):
            resolve_options(raw)


class TestLoadOptions:
    """Test loading options from files."""

    def test_yaml_file(self, tmp_path):
        """Test options load from YAML."""
        path = tmp_path / "options.yaml"
        path.write_text(
            "strict: false\n"
            "cycle_handling: ignore\n"
            "path_filter:\n"
            "  mode: exclude\n"
            "  patterns:\n"
            "    - .timestamp\n"
        )
        options = load_options(path)
        assert options.strict is False
        assert options.cycle_handling == CycleHandling.IGNORE
        assert options.path_filter.patterns == (".timestamp",)

    def test_json_file(self, tmp_path):
        """Test options load from JSON."""
        path = tmp_path / "options.json"
        path.write_text('{"maxDepth": 5}')
        assert load_options(path).max_depth == 5

    def test_empty_file(self, tmp_path):
        """Test an empty file yields the defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_options(path) == CompareOptions()

    def test_missing_file(self, tmp_path):
        """Test a missing file raises OptionsError."""
        with pytest.raises(OptionsError):
            load_options(tmp_path / "nope.yaml")

    def test_unparsable_file(self, tmp_path):
        """Test malformed YAML raises OptionsError."""
        path = tmp_path / "bad.yaml"
        path.write_text("strict: [unclosed\n")
        with pytest.raises(OptionsError):
            load_options(path)
