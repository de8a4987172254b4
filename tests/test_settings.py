# tests/test_settings.py
"""
Unit tests for PersonalExpenseTracker.settings.lib
(covers helpers, validators, ConfigPaths, and SettingsAPI).

Run with:
    python -m unittest tests.test_settings
"""
import json
import unittest
from pathlib import Path
from typing import Any, Dict

from PersonalExpenseTracker.settings import lib
from PersonalExpenseTracker.settings.lib import (
    SETTINGS_SCHEMA,
    SettingsAPI,
    _validate_categories,
    _validate_metadata,
    is_valid_hex_color,
)
from PersonalExpenseTracker.status import status
from PersonalExpenseTracker.ui.actions import signals
from tests.base import BaseTestCase, capture_signal

META_FIXTURE: Dict[str, Any] = {
    "name": "Test Tracker",
    "locale": "en_US",
    "theme": "light",
    "span": 2,
}


def minimal_settings() -> Dict[str, Any]:
    return {
        "metadata": META_FIXTURE.copy(),
        "categories": {
            "Food": {"display_name": "Meals", "color": "#FF0000"},
            "Rent": {"display_name": "Rent", "color": "#00FF00"},
        },
    }


def write_json(p: Path, data: Dict[str, Any]) -> None:
    with p.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=4, ensure_ascii=False)


class HelperFunctionTests(unittest.TestCase):
    def test_hex_colour_validation(self):
        self.assertTrue(is_valid_hex_color("#abcdef"))
        self.assertFalse(is_valid_hex_color("#abcdex"))
        self.assertFalse(is_valid_hex_color("abcdef"))
        self.assertFalse(is_valid_hex_color("#abc"))

    def test_validate_metadata_good(self):
        _validate_metadata(META_FIXTURE.copy(), SETTINGS_SCHEMA["metadata"])

    def test_validate_metadata_missing_key(self):
        meta = META_FIXTURE.copy()
        del meta["locale"]
        with self.assertRaises(ValueError):
            _validate_metadata(meta, SETTINGS_SCHEMA["metadata"])

    def test_validate_metadata_bad_values(self):
        for key, value, exc in (
                ("span", 0, ValueError),
                ("span", True, TypeError),
                ("span", "1", TypeError),
                ("theme", "purple", ValueError),
                ("locale", "zz_ZZ", ValueError),
                ("name", 12, TypeError),
        ):
            with self.subTest(key=key, value=value):
                meta = META_FIXTURE.copy()
                meta[key] = value
                with self.assertRaises(exc):
                    _validate_metadata(meta, SETTINGS_SCHEMA["metadata"])

    def test_validate_categories_good(self):
        _validate_categories(minimal_settings()["categories"], SETTINGS_SCHEMA["categories"]["item_schema"])

    def test_validate_categories_bad_colour(self):
        bad = {"Food": {"display_name": "Food", "color": "red"}}
        with self.assertRaises(ValueError):
            _validate_categories(bad, SETTINGS_SCHEMA["categories"]["item_schema"])

    def test_validate_categories_missing_field(self):
        bad = {"Food": {"color": "#FF0000"}}
        with self.assertRaises(ValueError):
            _validate_categories(bad, SETTINGS_SCHEMA["categories"]["item_schema"])

    def test_validate_categories_rejects_all_sentinel(self):
        for name in ("All", "all"):
            with self.subTest(name=name):
                bad = {name: {"display_name": "Everything", "color": "#FF0000"}}
                with self.assertRaises(ValueError):
                    _validate_categories(bad, SETTINGS_SCHEMA["categories"]["item_schema"])


class RealTemplateSmokeTest(BaseTestCase):
    def test_templates_exist(self):
        cp = lib.ConfigPaths()
        self.assertTrue(cp.settings_template.exists())
        self.assertTrue(cp.stylesheet_path.exists())
        self.assertTrue(cp.settings_path.exists())

    def test_template_is_valid(self):
        with self.config_paths.settings_template.open("r", encoding="utf-8") as f:
            data = json.load(f)
        lib.settings.validate_settings_data(data)
        self.assertEqual(data["metadata"]["locale"], "en_PH")
        self.assertEqual(list(data["categories"]), ["Food", "Transport", "Bills", "Snacks"])


class SettingsAPIBehaviour(BaseTestCase):
    """Functional coverage for SettingsAPI."""

    def setUp(self) -> None:
        super().setUp()

        write_json(self.config_paths.settings_path, minimal_settings())

        self.api: SettingsAPI = lib.settings
        self.api.load_settings()

    def test_metadata_get(self):
        self.assertEqual(self.api["name"], "Test Tracker")
        self.assertEqual(self.api["span"], 2)
        with self.assertRaises(KeyError):
            _ = self.api["bogus"]

    def test_metadata_set_and_coercion(self):
        self.api["span"] = "6"  # string → int coercion
        self.assertEqual(self.api["span"], 6)

        # persisted
        with self.api.settings_path.open("r", encoding="utf-8") as f:
            self.assertEqual(json.load(f)["metadata"]["span"], 6)

    def test_metadata_wrong_type_conversion_failure(self):
        with self.assertRaises(ValueError):
            self.api["span"] = "not-a-number"

    def test_metadata_invalid_value_rolls_back(self):
        with self.assertRaises(ValueError):
            self.api["theme"] = "purple"
        self.assertEqual(self.api["theme"], "light")

        with self.assertRaises(ValueError):
            self.api["span"] = 0
        self.assertEqual(self.api["span"], 2)

    def test_unknown_locale_rolls_back(self):
        with self.assertRaises(ValueError):
            self.api["locale"] = "zz_ZZ"
        self.assertEqual(self.api["locale"], "en_US")

        with self.api.settings_path.open("r", encoding="utf-8") as f:
            self.assertEqual(json.load(f)["metadata"]["locale"], "en_US")

    def test_unknown_locale_in_file_is_invalid(self):
        data = minimal_settings()
        data["metadata"]["locale"] = "zz_ZZ"
        write_json(self.api.settings_path, data)
        with self.assertRaises(status.SettingsInvalidException):
            self.api.load_settings()

    def test_metadata_set_emits_signal(self):
        with capture_signal(signals.metadataChanged) as received:
            self.api["name"] = "Renamed"
        self.assertEqual(received, [("name", "Renamed")])

    def test_block_signals(self):
        self.api.block_signals(True)
        try:
            with capture_signal(signals.metadataChanged) as received:
                self.api["name"] = "Quiet"
        finally:
            self.api.block_signals(False)
        self.assertEqual(received, [])
        self.assertEqual(self.api["name"], "Quiet")

    def test_categories_keep_order(self):
        self.assertEqual(self.api.categories(), ["Food", "Rent"])

    def test_set_section_categories(self):
        categories = self.api.get_section("categories")
        categories["Travel"] = {"display_name": "Travel", "color": "#0000FF"}

        with capture_signal(signals.configSectionChanged) as received:
            self.api.set_section("categories", categories)

        self.assertEqual(received, [("categories",)])
        self.assertEqual(self.api.categories(), ["Food", "Rent", "Travel"])

        self.api.load_settings()
        self.assertIn("Travel", self.api.categories())

    def test_set_section_invalid_value_rollback(self):
        categories = self.api.get_section("categories")
        categories["Broken"] = {"display_name": "Broken", "color": "blue"}

        with self.assertRaises(ValueError):
            self.api.set_section("categories", categories)

        self.assertNotIn("Broken", self.api.categories())

    def test_set_section_unknown(self):
        with self.assertRaises(ValueError):
            self.api.set_section("does_not_exist", {})

    def test_revert_section_metadata(self):
        self.api["name"] = "__sentinel__"
        self.api.revert_section("metadata")
        self.assertEqual(self.api["name"], "Personal Expense Tracker")
        self.assertEqual(self.api["locale"], "en_PH")

    def test_save_section_unknown(self):
        with self.assertRaises(ValueError):
            self.api.save_section("does_not_exist")

    def test_missing_settings_file(self):
        self.api.settings_path.unlink()
        with self.assertRaises(status.SettingsNotFoundException):
            self.api.load_settings()

        self.api.revert_settings_to_template()
        self.assertEqual(self.api.load_settings()["metadata"]["name"], "Personal Expense Tracker")

    def test_invalid_json(self):
        self.api.settings_path.write_text("{ not json", encoding="utf-8")
        with self.assertRaises(status.SettingsInvalidException):
            self.api.load_settings()

        # the loaded settings are kept
        self.assertEqual(self.api["name"], "Test Tracker")

    def test_invalid_schema(self):
        data = minimal_settings()
        del data["categories"]
        write_json(self.api.settings_path, data)
        with self.assertRaises(status.SettingsInvalidException):
            self.api.load_settings()
