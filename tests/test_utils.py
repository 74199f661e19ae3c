"""Tests for date helpers, currency formatting, config and providers."""

import json
from datetime import date, datetime

import pytest

from utils import app_config
from utils.currency import format_currency, round_half_up
from utils.date_helpers import (
    days_in_month,
    format_display_date,
    long_label,
    parse_date,
    parse_display_date,
    previous_month,
    short_label,
    trailing_days,
)
from utils.providers import FixedClock, RandomProvider


class TestDateHelpers:
    """Tests for parsing and labelling dates."""

    def test_parse_date(self):
        assert parse_date("2026-10-08") == date(2026, 10, 8)
        assert parse_date(" 2026.10.08 ") == date(2026, 10, 8)
        assert parse_date("2026-02-30") is None
        assert parse_date("") is None
        assert parse_date(None) is None

    def test_previous_month(self):
        assert previous_month(2026, 1) == (2025, 12)
        assert previous_month(2026, 10) == (2026, 9)

    def test_days_in_month(self):
        assert days_in_month(2028, 2) == 29
        assert days_in_month(2026, 10) == 31

    def test_trailing_days(self):
        days = trailing_days(date(2026, 3, 2), 3)
        assert days == [date(2026, 2, 28), date(2026, 3, 1), date(2026, 3, 2)]

    def test_labels(self):
        assert short_label(date(2026, 10, 8)) == "Oct 8"
        assert long_label("2026-10-08") == "Oct 8, 2026"
        assert long_label("garbage") == "garbage"

    def test_display_formats(self):
        assert format_display_date("2026-10-08", "DD/MM/YYYY") == "08/10/2026"
        assert format_display_date("2026-10-08", "DD.MM.YYYY") == "08.10.2026"
        assert parse_display_date("10/08/2026", "MM/DD/YYYY") == date(2026, 10, 8)
        assert parse_display_date("2026-10-08", "DD/MM/YYYY") == date(2026, 10, 8)


class TestCurrency:
    def test_format(self):
        assert format_currency(1234.5) == "$1,234.50"
        assert format_currency(-5) == "-$5.00"
        assert format_currency(3, "€") == "€3.00"

    def test_round_half_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(12.49) == 12


class TestAppConfig:
    """Tests for the bootstrap config file."""

    def test_missing_file(self, tmp_path):
        assert app_config.load_config(tmp_path / "none.json") == {}

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{oops", encoding="utf-8")
        assert app_config.load_config(path) == {}

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "sub" / "config.json"
        app_config.save_config({"db_folder": "/data"}, path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"db_folder": "/data"}
        assert app_config.load_config(path) == {"db_folder": "/data"}
        assert not path.with_suffix(".tmp").exists()

    def test_db_folder(self, tmp_path, monkeypatch):
        monkeypatch.setattr(app_config, "CONFIG_FILE", tmp_path / "config.json")
        app_config.set_db_folder("/somewhere")
        assert app_config.get_db_folder() == "/somewhere"
        app_config.set_db_folder(None)
        assert app_config.get_db_folder() is None

    def test_log_level(self, tmp_path, monkeypatch):
        monkeypatch.setattr(app_config, "CONFIG_FILE", tmp_path / "config.json")
        assert app_config.get_log_level() == "WARNING"
        app_config.save_config({"log_level": "debug"})
        assert app_config.get_log_level() == "DEBUG"
        app_config.save_config({"log_level": "chatty"})
        assert app_config.get_log_level() == "WARNING"

    @pytest.mark.parametrize("raw,expected", [("42", 42), ("", None), ("abc", None)])
    def test_random_seed(self, monkeypatch, raw, expected):
        monkeypatch.setenv(app_config.SEED_ENV_VAR, raw)
        assert app_config.get_random_seed() == expected


class TestProviders:
    def test_fixed_clock(self):
        clock = FixedClock(datetime(2026, 10, 18, 12, 0))
        assert clock.today() == date(2026, 10, 18)
        assert clock.now().hour == 12

    def test_shuffle_returns_copy(self):
        items = [1, 2, 3, 4, 5]
        shuffled = RandomProvider(1).shuffle(items)
        assert items == [1, 2, 3, 4, 5]
        assert sorted(shuffled) == items

    def test_seeded_shuffle_is_reproducible(self):
        assert RandomProvider(9).shuffle(range(10)) == RandomProvider(9).shuffle(range(10))
