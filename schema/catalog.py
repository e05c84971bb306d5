"""
Settings catalog - the in-memory view of every setting the schema defines.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .reader import CATEGORY_TYPES, SchemaReader


DEFAULT_DESCRIPTION = "No description"

# Labels used in snapshot group keys and console output
CATEGORY_LABELS = {
    "system_properties": "system_property",
    "kernel_parameters": "kernel_parameter",
    "environment_variables": "environment_variable",
    "android_specific": "android_setting",
}

CATEGORY_TITLES = {
    "system_properties": "System Properties",
    "kernel_parameters": "Kernel Parameters",
    "environment_variables": "Environment Variables",
    "android_specific": "Android Settings",
}


def is_applyable(default: Optional[str]) -> bool:
    """A default is applied only when it is non-empty and not the literal 'null'."""
    return bool(default) and default != "null"


@dataclass(frozen=True)
class SettingDescriptor:
    """Schema-defined record for one configurable key."""
    category_type: str
    category_name: str
    key: str
    default: str = ""
    description: str = DEFAULT_DESCRIPTION

    @property
    def applyable(self) -> bool:
        return is_applyable(self.default)

    @property
    def group_key(self) -> str:
        """Snapshot grouping key, e.g. 'system_property_wifi'."""
        return f"{CATEGORY_LABELS[self.category_type]}_{self.category_name}"


@dataclass
class Catalog:
    """
    category_type -> category_name -> ordered descriptors.

    Built fresh from a SchemaReader on every run. Iteration follows the fixed
    category type order and then document order.
    """
    categories: Dict[str, Dict[str, List[SettingDescriptor]]] = field(default_factory=dict)
    source: Optional[str] = None

    @classmethod
    def build(cls, reader: SchemaReader) -> "Catalog":
        categories: Dict[str, Dict[str, List[SettingDescriptor]]] = {}

        for category_type in CATEGORY_TYPES:
            names: Dict[str, List[SettingDescriptor]] = {}
            for category_name in reader.list_category_names(category_type):
                descriptors = []
                for key in reader.list_item_keys(category_type, category_name):
                    description = reader.get_field(category_type, category_name, key, "description")
                    descriptors.append(SettingDescriptor(
                        category_type=category_type,
                        category_name=category_name,
                        key=key,
                        default=reader.get_field(category_type, category_name, key, "default"),
                        description=description or DEFAULT_DESCRIPTION,
                    ))
                names[category_name] = descriptors
            categories[category_type] = names

        return cls(categories=categories, source=reader.path)

    @classmethod
    def load(cls, path) -> "Catalog":
        return cls.build(SchemaReader.load(path))

    def category_names(self, category_type: str) -> List[str]:
        return list(self.categories.get(category_type, {}))

    def settings(self, category_type: str, category_name: str) -> List[SettingDescriptor]:
        return list(self.categories.get(category_type, {}).get(category_name, []))

    def iter_settings(
        self,
        category_type: Optional[str] = None,
        category_name: Optional[str] = None,
    ) -> Iterator[SettingDescriptor]:
        """Yield descriptors in catalog order, optionally filtered."""
        for ctype in CATEGORY_TYPES:
            if category_type and ctype != category_type:
                continue
            for cname, descriptors in self.categories.get(ctype, {}).items():
                if category_name and cname != category_name:
                    continue
                yield from descriptors

    def find(self, key: str) -> Optional[SettingDescriptor]:
        """First descriptor with this key across all categories."""
        for descriptor in self.iter_settings():
            if descriptor.key == key:
                return descriptor
        return None

    def applyable(self) -> List[SettingDescriptor]:
        return [d for d in self.iter_settings() if d.applyable]

    def __len__(self) -> int:
        return sum(1 for _ in self.iter_settings())
