"""
Value casting utilities.
"""

from typing import Any

import yaml


def as_bool(value: Any, default: bool = False) -> bool:
    """Interpret a property value as a boolean using ``PyYAML`` boolean parsing.
    Accepts real booleans and YAML boolean spellings (``true``, ``False``, ``yes``, ``off``...).
    Empty or ``None`` values give ``default``; anything else that is not a boolean is ``False``.
    """
    if isinstance(value, bool):
        return value
    if value is None or str(value).strip() == "":
        return default

    try:
        parsed = yaml.safe_load(str(value).strip())
    except yaml.YAMLError:
        return False

    return parsed is True
