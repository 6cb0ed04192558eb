"""
Configuration file loading.

The configuration is a JSON object:

    {
        "Query": "SELECT a, b, c FROM events WHERE ts BETWEEN %s AND %s",
        "Fields": 3,
        "Months": 12,
        "Directory": "/data/reports",
        "Systems": {
            "plant1": "server=db1;database=EVENTS;user=report;password=secret",
            "plant2": "server=db2;database=EVENTS"
        }
    }

Keys are matched case-insensitively. Missing keys take empty/zero values.
"""

import json
from dataclasses import dataclass, field
from typing import Dict

from t3rep.errors import ConfigurationError


@dataclass
class Config:
    query: str = ''
    fields: int = 0
    months: int = 0
    directory: str = ''
    systems: Dict[str, str] = field(default_factory=dict)


def _coerce_int(value, key):
    # bool is an int subclass but not a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"cannot decode JSON configuration: '{key}' must be an integer")
    return value


def _coerce_str(value, key):
    if not isinstance(value, str):
        raise ConfigurationError(f"cannot decode JSON configuration: '{key}' must be a string")
    return value


def parse_config(data):
    """
    Build a Config from a decoded JSON document.

    Args:
        data: Decoded JSON value

    Returns:
        Config: Parsed configuration

    Raises:
        ConfigurationError: If the document does not have the expected shape
    """
    if not isinstance(data, dict):
        raise ConfigurationError('cannot decode JSON configuration: root must be an object')

    cf = Config()
    for key, value in data.items():
        name = key.lower()
        if value is None:
            continue
        if name == 'query':
            cf.query = _coerce_str(value, key)
        elif name == 'fields':
            cf.fields = _coerce_int(value, key)
        elif name == 'months':
            cf.months = _coerce_int(value, key)
        elif name == 'directory':
            cf.directory = _coerce_str(value, key)
        elif name == 'systems':
            if not isinstance(value, dict):
                raise ConfigurationError(f"cannot decode JSON configuration: '{key}' must be an object")
            for system, dsn in value.items():
                cf.systems[system] = _coerce_str(dsn, f'{key}.{system}')
        # Unknown keys are ignored
    return cf


def load_config(fname):
    """
    Load the configuration file.

    Args:
        fname: Path to the JSON configuration file

    Returns:
        Config: Parsed configuration

    Raises:
        ConfigurationError: If the file cannot be read or decoded
    """
    try:
        with open(fname, 'r', encoding='utf-8') as f:
            raw = f.read()
    except OSError as e:
        raise ConfigurationError(f'cannot open configuration file: {e}') from e

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise ConfigurationError(f'cannot decode JSON configuration: {e}') from e

    return parse_config(data)
