"""Settings library for the application configuration.

Provides:
    - Schema validation and enforcement for the settings.json structure.
    - Loading, saving, reverting, and managing application settings.
    - Constants for column names and data schemas.
"""

import json
import logging
import pathlib
import re
import shutil
from typing import Dict, Any, Optional, List

from PySide6 import QtCore, QtWidgets

from .locale import LOCALE_MAP
from ..status import status

app_name: str = 'PersonalExpenseTracker'

ALL_CATEGORIES: str = 'All'

TRANSACTION_DATA_COLUMNS: List[str] = ['amount', 'date', 'category', 'payment_method']

THEMES: List[str] = ['light', 'dark']

METADATA_KEYS: List[str] = [
    'name',
    'locale',
    'theme',
    'span',
]

SETTINGS_SCHEMA: Dict[str, Any] = {
    'metadata': {
        'type': dict,
        'required': True,
        'required_keys': METADATA_KEYS,
        'item_schema': {
            'name': {'type': str, 'required': True},
            'locale': {'type': str, 'required': True},
            'theme': {'type': str, 'required': True},
            'span': {'type': int, 'required': True},
        }
    },
    'categories': {
        'type': dict,
        'required': True,
        'item_schema': {
            'display_name': {'type': str, 'required': True},
            'color': {'type': str, 'required': True, 'format': 'hexcolor'},
        }
    }
}


def is_valid_hex_color(value: str) -> bool:
    """Check if a string is a valid hexadecimal color in #RRGGBB format.

    Args:
        value (str): Color string to validate.

    Returns:
        bool: True if value matches '#RRGGBB', False otherwise.
    """
    return bool(re.fullmatch(r'#[0-9A-Fa-f]{6}', value))


def _validate_metadata(metadata_dict: Dict[str, Any], specs: Dict[str, Any]) -> None:
    """Validate the 'metadata' section of the settings.

    Args:
        metadata_dict: Mapping of metadata keys to values.
        specs: Schema dict containing 'required_keys' and 'item_schema'.

    Raises:
        ValueError: If a required key is missing or a value is out of range.
        TypeError: If a value is not of the expected type.
    """
    logging.debug('Validating "metadata" section.')
    missing = [k for k in specs['required_keys'] if k not in metadata_dict]
    if missing:
        msg: str = f'metadata is missing keys: {missing}.'
        logging.error(msg)
        raise ValueError(msg)

    for key, field_specs in specs['item_schema'].items():
        value = metadata_dict[key]
        # bool is an int subclass and is never a valid span
        if not isinstance(value, field_specs['type']) or isinstance(value, bool):
            msg = f'Metadata key "{key}" must be {field_specs["type"]}, got {type(value)}.'
            logging.error(msg)
            raise TypeError(msg)

    if metadata_dict['locale'] not in LOCALE_MAP:
        msg = f'Metadata key "locale" must be one of {LOCALE_MAP}, got "{metadata_dict["locale"]}".'
        logging.error(msg)
        raise ValueError(msg)

    if metadata_dict['theme'] not in THEMES:
        msg = f'Metadata key "theme" must be one of {THEMES}, got "{metadata_dict["theme"]}".'
        logging.error(msg)
        raise ValueError(msg)

    if metadata_dict['span'] < 1:
        msg = f'Metadata key "span" must be at least 1, got {metadata_dict["span"]}.'
        logging.error(msg)
        raise ValueError(msg)


def _validate_categories(categories_dict: Dict[str, Any], item_schema: Dict[str, Any]) -> None:
    """Validate the 'categories' section of the settings.

    Ensures categories_dict maps category names to dicts of required fields matching item_schema.

    Args:
        categories_dict: Mapping of category names to their configuration dicts.
        item_schema: Dict describing required fields, types, and format constraints.

    Raises:
        TypeError: If category entries are not dicts or have fields of the wrong type.
        ValueError: If a required field is missing, fails format validation, or a
            category shadows the 'All' sentinel.
    """
    logging.debug('Validating "categories" section.')
    for cat_name, cat_info in categories_dict.items():
        if cat_name.casefold() == ALL_CATEGORIES.casefold():
            msg: str = f'"{ALL_CATEGORIES}" is reserved and cannot be used as a category name.'
            logging.error(msg)
            raise ValueError(msg)
        if not isinstance(cat_info, dict):
            msg = f'Category "{cat_name}" must be a dict.'
            logging.error(msg)
            raise TypeError(msg)
        for field, field_specs in item_schema.items():
            if field_specs['required'] and field not in cat_info:
                msg = f'Category "{cat_name}" missing "{field}".'
                logging.error(msg)
                raise ValueError(msg)
            if field not in cat_info:
                continue
            if not isinstance(cat_info[field], field_specs['type']):
                msg = (
                    f'Category "{cat_name}" field "{field}" must be {field_specs["type"]}, '
                    f'got {type(cat_info[field])}.'
                )
                logging.error(msg)
                raise TypeError(msg)
            if field_specs.get('format') == 'hexcolor' and not is_valid_hex_color(cat_info[field]):
                msg = (
                    f'Category "{cat_name}" field "{field}" must be a valid '
                    f'hex color (#RRGGBB), got "{cat_info[field]}".'
                )
                logging.error(msg)
                raise ValueError(msg)


class ConfigPaths:
    """Manage application file paths and ensure the default template and directories exist.

    The settings template ships inside the package; the user's copy lives in the
    application data directory and is created from the template on first use.
    """

    def __init__(self) -> None:
        QtWidgets.QApplication.setApplicationName(app_name)
        QtWidgets.QApplication.setOrganizationName('')
        logging.debug(f'Setting application name: {app_name}')

        p = QtCore.QStandardPaths.writableLocation(QtCore.QStandardPaths.AppDataLocation)
        app_data_dir = pathlib.Path(p)
        logging.debug(f'Using app data directory: {app_data_dir}')

        self.template_dir: pathlib.Path = pathlib.Path(__file__).parent.parent / 'config'
        self.settings_template: pathlib.Path = self.template_dir / 'settings.json.template'
        self.stylesheet_path: pathlib.Path = self.template_dir / 'stylesheet.qss'

        self.config_dir: pathlib.Path = app_data_dir / 'config'
        self.settings_path: pathlib.Path = self.config_dir / 'settings.json'

        self._verify_and_prepare()

    def _verify_and_prepare(self) -> None:
        """Verify the template exists, create the config directory and copy the default settings.

        Raises:
            FileNotFoundError: If the template directory or file is missing.
        """
        logging.debug(f'Verifying required directories and templates in {self.template_dir}')
        if not self.template_dir.exists():
            msg: str = f'Missing template directory: {self.template_dir}'
            logging.error(msg)
            raise FileNotFoundError(msg)
        if not self.settings_template.exists():
            msg = f'Missing settings template: {self.settings_template}'
            logging.error(msg)
            raise FileNotFoundError(msg)

        if not self.config_dir.exists():
            logging.debug(f'Creating config directory: {self.config_dir}')
            self.config_dir.mkdir(parents=True, exist_ok=True)

        if not self.settings_path.exists():
            logging.debug(f'Copying default settings from template to {self.settings_path}')
            shutil.copy(self.settings_template, self.settings_path)

    def revert_settings_to_template(self) -> None:
        """Restore settings.json from the default template file.

        Raises:
            FileNotFoundError: If the settings template file is missing.
        """
        logging.debug(f'Reverting settings to template: {self.settings_template}')
        if not self.settings_template.exists():
            msg: str = f'Settings template not found: {self.settings_template}'
            logging.error(msg)
            raise FileNotFoundError(msg)
        shutil.copy(self.settings_template, self.settings_path)


class SettingsAPI(ConfigPaths):
    """
    Provides an interface to get/set/revert/save settings.json sections.
    """

    def __init__(self, settings_path: Optional[str] = None) -> None:
        """Initialize SettingsAPI and load the settings data.

        Args:
            settings_path: Optional path to a custom settings.json file.
        """
        super().__init__()

        self.settings_path: pathlib.Path = pathlib.Path(settings_path) if settings_path else self.settings_path

        self._signals_blocked: bool = False

        self.settings_data: Dict[str, Any] = {k: {} for k in SETTINGS_SCHEMA}

        self.init_data()

    def __getitem__(self, key: str) -> Any:
        """Retrieve a metadata value using dictionary-style access.

        Raises:
            KeyError: If key is not in METADATA_KEYS.
        """
        if key not in METADATA_KEYS:
            raise KeyError(f'Invalid metadata key: {key}, must be one of {METADATA_KEYS}')

        _type = SETTINGS_SCHEMA['metadata']['item_schema'][key]['type']
        v = self.settings_data['metadata'].get(key)
        if not isinstance(v, _type):
            logging.error(f'Metadata key "{key}" is not of type {_type}, got {type(v)}.')
            return None
        return v

    def __setitem__(self, key: str, value: Any) -> None:
        """Assign a metadata value using dictionary-style access and persist it.

        Raises:
            KeyError: If key is not in METADATA_KEYS.
            ValueError: If the value cannot be converted to the expected type or is out of range.
        """
        if key not in METADATA_KEYS:
            raise KeyError(f'Invalid metadata key: {key}, must be one of {METADATA_KEYS}')

        _type = SETTINGS_SCHEMA['metadata']['item_schema'][key]['type']
        if not isinstance(value, _type):
            logging.warning(f'Metadata key "{key}" is not of type {_type}, got {type(value)}.')
            try:
                value = _type(value)
            except ValueError:
                logging.error(f'Cannot convert "{value}" to {_type}.')
                raise

        previous = self.settings_data['metadata'].get(key)
        self.settings_data['metadata'][key] = value
        try:
            _validate_metadata(self.settings_data['metadata'], SETTINGS_SCHEMA['metadata'])
        except (ValueError, TypeError):
            self.settings_data['metadata'][key] = previous
            raise
        self.save_section('metadata')

        if self._signals_blocked:
            return

        from ..ui.actions import signals
        signals.metadataChanged.emit(key, value)

    def block_signals(self, v: bool) -> None:
        """Enable or disable emission of configuration change signals."""
        self._signals_blocked = v

    @QtCore.Slot()
    def init_data(self) -> None:
        """Reload the settings from disk."""
        self.load_settings()

    def load_settings(self) -> Dict[str, Any]:
        """Load settings.json from disk and validate against the schema.

        Returns:
            The loaded settings dictionary.

        Raises:
            status.SettingsNotFoundException: If settings.json is missing.
            status.SettingsInvalidException: If JSON parsing or validation fails.
        """
        logging.debug(f'Loading settings from "{self.settings_path}"')
        if not self.settings_path.exists():
            raise status.SettingsNotFoundException(f'{self.settings_path}')

        try:
            with self.settings_path.open('r', encoding='utf-8') as f:
                data: Dict[str, Any] = json.load(f)
            self.validate_settings_data(data)
        except (ValueError, TypeError) as ex:
            raise status.SettingsInvalidException(f'{ex}') from ex

        self.settings_data = data
        return self.settings_data

    def validate_settings_data(self, data: Dict[str, Any] = None) -> None:
        """Validate settings data against SETTINGS_SCHEMA.

        Args:
            data (dict, optional): Settings data to validate. Defaults to self.settings_data.

        Raises:
            ValueError: If a required section is missing or a value is invalid.
            TypeError: If a section or value has the wrong type.
        """
        if data is None:
            data = self.settings_data

        logging.debug('Validating settings data against schema.')
        for field, specs in SETTINGS_SCHEMA.items():
            if specs.get('required') and field not in data:
                msg: str = f'Missing required field: {field}'
                logging.error(msg)
                raise ValueError(msg)

            if not isinstance(data[field], specs['type']):
                msg = f'Field "{field}" must be {specs["type"]}, got {type(data[field])}.'
                logging.error(msg)
                raise TypeError(msg)

            if field == 'metadata':
                _validate_metadata(data[field], specs)
            elif field == 'categories':
                _validate_categories(data[field], specs['item_schema'])

        logging.debug('Settings data is valid.')

    def get_section(self, section_name: str) -> Dict[str, Any]:
        """Retrieve a copy of a settings section.

        Raises:
            KeyError: If section_name is not a settings section.
        """
        return self.settings_data[section_name].copy()

    def set_section(self, section_name: str, new_data: Dict[str, Any]) -> None:
        """Replace, validate and persist a settings section.

        The previous section data is restored if validation fails.

        Raises:
            ValueError: If section_name is unrecognized or the new data is invalid.
            TypeError: If the new data has the wrong type.
        """
        if section_name not in self.settings_data:
            msg: str = f'Unknown section_name for set: "{section_name}"'
            logging.error(msg)
            raise ValueError(msg)

        current_section_data: Dict[str, Any] = self.settings_data[section_name].copy()

        self.settings_data[section_name] = new_data
        try:
            self.validate_settings_data()
        except (ValueError, TypeError) as e:
            logging.error(f'Validation error on set_section("{section_name}"): {e}')
            self.settings_data[section_name] = current_section_data
            raise

        self.save_section(section_name)

        if self._signals_blocked:
            return

        from ..ui.actions import signals
        signals.configSectionChanged.emit(section_name)

    def revert_section(self, section_name: str) -> None:
        """Revert a settings section to its template default and save.

        Raises:
            ValueError: If section_name is invalid or not present in the template.
        """
        if section_name not in self.settings_data:
            msg: str = f'Unknown section_name for revert: "{section_name}"'
            logging.error(msg)
            raise ValueError(msg)

        with self.settings_template.open('r', encoding='utf-8') as f:
            template_data: Dict[str, Any] = json.load(f)

        if section_name not in template_data:
            msg = f'No template-based revert logic for section "{section_name}".'
            logging.error(msg)
            raise ValueError(msg)

        self.settings_data[section_name] = template_data[section_name]
        self.save_section(section_name)

        if self._signals_blocked:
            return

        from ..ui.actions import signals
        signals.configSectionChanged.emit(section_name)

    def save_section(self, section_name: str) -> None:
        """Persist a single settings section to settings.json.

        Raises:
            ValueError: If section_name is not recognized.
        """
        if section_name not in self.settings_data:
            msg: str = f'Unknown section_name for save: "{section_name}"'
            logging.error(msg)
            raise ValueError(msg)

        with self.settings_path.open('r', encoding='utf-8') as f:
            original_data: Dict[str, Any] = json.load(f)

        new_data: Dict[str, Any] = original_data.copy()
        new_data[section_name] = self.settings_data[section_name]

        logging.debug(f'Saving section "{section_name}" to "{self.settings_path}"')
        with self.settings_path.open('w', encoding='utf-8') as f:
            json.dump(new_data, f, indent=4, ensure_ascii=False)

    def categories(self) -> List[str]:
        """Return the configured category names in their configured order."""
        return list(self.settings_data['categories'].keys())


settings: SettingsAPI = SettingsAPI()
