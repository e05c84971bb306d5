"""
Schema module - reads android-network-keys.json into a settings catalog.
"""

from .reader import (
    CATEGORY_TYPES,
    SchemaReader,
    list_category_names,
    list_item_keys,
    get_field,
)
from .catalog import (
    Catalog,
    SettingDescriptor,
    CATEGORY_LABELS,
    CATEGORY_TITLES,
    DEFAULT_DESCRIPTION,
    is_applyable,
)

__all__ = [
    'CATEGORY_TYPES',
    'CATEGORY_LABELS',
    'CATEGORY_TITLES',
    'DEFAULT_DESCRIPTION',
    'SchemaReader',
    'Catalog',
    'SettingDescriptor',
    'is_applyable',
    'list_category_names',
    'list_item_keys',
    'get_field',
]
