"""Tests for configuration, input loading, presets and utilities."""

import io
import json
from datetime import date

import pytest
import yaml

from pkgtrend.comparisons import find_comparison, get_popular_comparisons
from pkgtrend.config import (
    load_comparison_file,
    parse_config,
    parse_group,
    parse_groups,
    set_baseline,
)
from pkgtrend.loader import load_raw_series, parse_day, parse_raw_data
from pkgtrend.utils import (
    format_number,
    format_percentage,
    make_sparkline,
    to_utc_day,
    validate_package_name,
)


class TestParseConfig:
    """Tests for building a chart configuration."""

    def test_defaults(self):
        assert parse_config() == {
            "range": "365-days",
            "bin_type": "weekly",
            "transform": "none",
            "show_data": "all",
        }

    def test_bin_type_defaults_to_range_default(self):
        assert parse_config("7-days")["bin_type"] == "daily"
        assert parse_config("all-time")["bin_type"] == "monthly"

    def test_invalid_pair_is_clamped(self, caplog):
        """An illegal pair should clamp and warn rather than fail."""
        with caplog.at_level("WARNING", logger="pkgtrend"):
            cfg = parse_config("90-days", "yearly")
        assert cfg["bin_type"] == "weekly"
        assert "not available" in caplog.text

    def test_valid_pair_is_kept(self):
        assert parse_config("730-days", "yearly")["bin_type"] == "yearly"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"time_range": "3-days"},
            {"bin_type": "hourly"},
            {"transform": "log"},
            {"show_data": "some"},
        ],
    )
    def test_unknown_tokens_raise(self, kwargs):
        with pytest.raises(ValueError):
            parse_config(**kwargs)


class TestParseGroups:
    """Tests for parsing package groups."""

    def test_name_shorthand(self):
        assert parse_group("react") == {"packages": [{"name": "react"}]}

    def test_list_shorthand(self):
        group = parse_group(["@tanstack/react-query", "react-query"])
        assert [p["name"] for p in group["packages"]] == [
            "@tanstack/react-query",
            "react-query",
        ]

    def test_mapping_with_options(self):
        group = parse_group(
            {
                "packages": ["a", {"name": "b", "hidden": True}],
                "color": "#FF4500",
                "baseline": True,
            }
        )
        assert group == {
            "packages": [{"name": "a"}, {"name": "b", "hidden": True}],
            "color": "#FF4500",
            "baseline": True,
        }

    def test_empty_group_raises(self):
        with pytest.raises(ValueError):
            parse_group({"packages": []})

    def test_invalid_entry_raises(self):
        with pytest.raises(ValueError):
            parse_group(42)

    def test_two_baselines_raise(self):
        """At most one group may be the baseline."""
        with pytest.raises(ValueError, match="baseline"):
            parse_groups(
                [
                    {"packages": ["a"], "baseline": True},
                    {"packages": ["b"], "baseline": True},
                ]
            )

    def test_set_baseline_moves_flag(self):
        groups = parse_groups([{"packages": ["a"], "baseline": True}, "b"])
        updated = set_baseline(groups, "b")
        assert not updated[0].get("baseline")
        assert updated[1]["baseline"] is True
        assert groups[0]["baseline"] is True

    def test_set_baseline_unknown_name_raises(self):
        with pytest.raises(ValueError):
            set_baseline(parse_groups(["a"]), "zzz")


class TestLoadComparisonFile:
    """Tests for reading comparison files."""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "comparison.yml"
        path.write_text(
            yaml.dump(
                {
                    "title": "Data Fetching",
                    "range": "90-days",
                    "bin_type": "weekly",
                    "groups": [["@tanstack/react-query", "react-query"], "swr"],
                }
            )
        )
        data = load_comparison_file(str(path))
        assert data["title"] == "Data Fetching"
        assert data["range"] == "90-days"
        assert data["bin_type"] == "weekly"
        assert len(data["groups"]) == 2

    def test_json_list(self, tmp_path):
        path = tmp_path / "frameworks.json"
        path.write_text(json.dumps(["react", "vue"]))
        data = load_comparison_file(str(path))
        assert data["title"] == "frameworks"
        assert [g["packages"][0]["name"] for g in data["groups"]] == ["react", "vue"]
        assert "range" not in data

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_comparison_file("/nonexistent/comparison.yml")


class TestLoader:
    """Tests for loading raw download series."""

    def test_parse_npm_shape(self):
        series = parse_raw_data(
            [
                {"package": "swr", "downloads": [{"day": "2024-01-01", "downloads": 3}]},
                {"package": "nope", "downloads": [], "error": "Not found"},
            ]
        )
        assert series[0] == {
            "package_name": "swr",
            "points": [{"day": date(2024, 1, 1), "downloads": 3}],
            "fetch_error": None,
        }
        assert series[1]["fetch_error"] == "Not found"
        assert series[1]["points"] == []

    def test_packages_mapping(self):
        series = parse_raw_data({"packages": [{"package": "a", "downloads": []}]})
        assert series[0]["package_name"] == "a"

    def test_negative_downloads_raise(self):
        with pytest.raises(ValueError):
            parse_raw_data(
                [{"package": "a", "downloads": [{"day": "2024-01-01", "downloads": -1}]}]
            )

    def test_bad_day_raises(self):
        with pytest.raises(ValueError):
            parse_raw_data(
                [{"package": "a", "downloads": [{"day": "yesterday", "downloads": 1}]}]
            )

    def test_duplicate_package_raises(self):
        with pytest.raises(ValueError):
            parse_raw_data([{"package": "a"}, {"package": "a"}])

    def test_yaml_dates(self, tmp_path):
        """YAML loads unquoted days as dates; they should pass through."""
        path = tmp_path / "downloads.yml"
        path.write_text("- package: a\n  downloads:\n    - day: 2024-01-02\n      downloads: 7\n")
        series = load_raw_series(str(path))
        assert series[0]["points"] == [{"day": date(2024, 1, 2), "downloads": 7}]

    def test_json_file(self, tmp_path):
        path = tmp_path / "downloads.json"
        path.write_text(
            json.dumps([{"package": "a", "downloads": [{"day": "2024-01-02", "downloads": 7}]}])
        )
        assert load_raw_series(str(path))[0]["points"][0]["downloads"] == 7

    def test_parse_day_accepts_timestamps(self):
        assert parse_day("2024-01-02T10:00:00Z") == date(2024, 1, 2)


class TestComparisons:
    """Tests for the built-in presets."""

    def test_presets_have_groups(self):
        presets = get_popular_comparisons()
        assert presets
        for preset in presets:
            assert preset["groups"]
            assert all(g["color"] for g in preset["groups"])

    def test_find_is_case_insensitive(self):
        preset = find_comparison("data fetching")
        assert preset is not None
        assert preset["groups"][0]["packages"][0]["name"] == "@tanstack/react-query"

    def test_find_unknown(self):
        assert find_comparison("nothing") is None

    def test_presets_are_fresh_copies(self):
        first = get_popular_comparisons()
        first[0]["groups"][0]["baseline"] = True
        assert "baseline" not in get_popular_comparisons()[0]["groups"][0]


class TestUtils:
    """Tests for utility functions."""

    def test_validate_package_name(self):
        assert validate_package_name("react") == (True, "")
        assert validate_package_name("@tanstack/react-query")[0]
        assert not validate_package_name("")[0]
        assert not validate_package_name("Bad Name")[0]
        assert not validate_package_name("a" * 215)[0]

    def test_format_number(self):
        assert format_number(123) == "123"
        assert format_number(1234) == "1.2K"
        assert format_number(1234567) == "1.2M"
        assert format_number(2_500_000_000) == "2.5B"
        assert format_number(0.5) == "0.50"
        assert format_number(10.0) == "10"

    def test_format_percentage(self):
        assert format_percentage(0.25) == "+25.0%"
        assert format_percentage(-0.5) == "-50.0%"

    def test_sparkline(self):
        assert len(make_sparkline([1, 2, 3], width=7)) == 7
        assert make_sparkline([], width=4) == "    "
        assert make_sparkline([0, 9], width=2) == " #"

    def test_to_utc_day(self):
        assert to_utc_day(date(2024, 1, 1)) == date(2024, 1, 1)


class TestLogging:
    """Tests for logger setup."""

    def test_levels(self):
        import logging as std_logging

        from pkgtrend.logging import logger, setup_logging

        stream = io.StringIO()
        setup_logging(verbose=True, stream=stream)
        assert logger.level == std_logging.DEBUG
        logger.debug("binning")
        assert "DEBUG: pkgtrend: binning" in stream.getvalue()

        setup_logging(verbose=True, quiet=True, stream=stream)
        assert logger.level == std_logging.WARNING
        assert len(logger.handlers) == 1

    def test_default_format_is_plain(self):
        from pkgtrend.logging import logger, setup_logging

        stream = io.StringIO()
        setup_logging(stream=stream)
        logger.info("Exported to x.json")
        assert stream.getvalue() == "Exported to x.json\n"
