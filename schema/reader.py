"""
Schema reader - loads android-network-keys.json and answers the three
questions the catalog needs: which category names exist under a category
type, which keys exist under a category name, and what a key's field holds.

The document is parsed with the json module and then checked against the
restricted shape:

    {"categories": {
        <category_type>: {
            <category_name>: {
                <key>: {<field>: scalar, ...}}}}}

Anything that does not fit raises SchemaError naming the offending path.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..errors import SchemaError


CATEGORY_TYPES = (
    "system_properties",
    "kernel_parameters",
    "environment_variables",
    "android_specific",
)

SCALAR_TYPES = (str, int, float, bool, type(None))


def _json_path(*parts: str) -> str:
    """Render a location like .categories.system_properties.wifi."wifi.interface"."""
    rendered = []
    for part in parts:
        if part.replace("_", "").isalnum():
            rendered.append(f".{part}")
        else:
            rendered.append(f'."{part}"')
    return "".join(rendered) or "."


def _scalar_to_str(value: Any) -> str:
    """Return a leaf value the way it appears in the document."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # Files are parsed with number tokens left as text, so this only
    # handles in-memory documents and booleans ("true", "1", "0.5")
    return json.dumps(value)


class SchemaReader:
    """Read-only view over a validated schema document."""

    def __init__(self, document: Dict[str, Any], path: Optional[str] = None):
        self.path = path
        self._categories = self._validate(document)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "SchemaReader":
        """
        Load and validate a schema file.

        Raises:
            SchemaError: file missing, unreadable, not JSON, or wrong shape
        """
        path = Path(path)
        if not path.is_file():
            raise SchemaError("Schema file not found", path=str(path))

        try:
            with open(path, encoding="utf-8") as f:
                document = json.load(f, parse_float=str, parse_int=str)
        except OSError as e:
            raise SchemaError(f"Schema file not readable ({e.strerror})", path=str(path))
        except json.JSONDecodeError as e:
            raise SchemaError(
                f"Invalid JSON: {e.msg}",
                path=str(path),
                location=f"line {e.lineno} column {e.colno}",
            )

        return cls(document, path=str(path))

    @classmethod
    def from_string(cls, text: str) -> "SchemaReader":
        """Build a reader from JSON text (used by tests and stdin input)."""
        try:
            document = json.loads(text, parse_float=str, parse_int=str)
        except json.JSONDecodeError as e:
            raise SchemaError(f"Invalid JSON: {e.msg}", location=f"line {e.lineno} column {e.colno}")
        return cls(document)

    def _validate(self, document: Any) -> Dict[str, Dict[str, Dict[str, Dict[str, Any]]]]:
        if not isinstance(document, dict):
            raise SchemaError("Top-level value must be an object", path=self.path)

        categories = document.get("categories")
        if not isinstance(categories, dict):
            raise SchemaError("Missing 'categories' object", path=self.path, location=".")

        for category_type, names in categories.items():
            if category_type not in CATEGORY_TYPES:
                raise SchemaError(
                    f"Unknown category type '{category_type}'",
                    path=self.path,
                    location=_json_path("categories"),
                )
            if not isinstance(names, dict):
                raise SchemaError(
                    "Category type must map to an object",
                    path=self.path,
                    location=_json_path("categories", category_type),
                )

            for category_name, keys in names.items():
                if not isinstance(keys, dict):
                    raise SchemaError(
                        "Category name must map to an object of keys",
                        path=self.path,
                        location=_json_path("categories", category_type, category_name),
                    )

                for key, leaf in keys.items():
                    location = _json_path("categories", category_type, category_name, key)
                    if not isinstance(leaf, dict):
                        raise SchemaError("Setting entry must be an object", path=self.path, location=location)
                    for field_name, value in leaf.items():
                        if not isinstance(value, SCALAR_TYPES):
                            raise SchemaError(
                                f"Field '{field_name}' must be a string, number, boolean or null",
                                path=self.path,
                                location=location,
                            )

        return categories

    def _check_type(self, category_type: str) -> None:
        if category_type not in CATEGORY_TYPES:
            raise SchemaError(f"Unknown category type '{category_type}'", path=self.path)

    # =========================================================================
    # Queries
    # =========================================================================

    def list_category_names(self, category_type: str) -> List[str]:
        """Category names directly under a category type, in document order."""
        self._check_type(category_type)
        return list(self._categories.get(category_type, {}))

    def list_item_keys(self, category_type: str, category_name: str) -> List[str]:
        """Setting keys under one category name, in document order."""
        self._check_type(category_type)
        return list(self._categories.get(category_type, {}).get(category_name, {}))

    def get_field(self, category_type: str, category_name: str, key: str, field: str) -> str:
        """
        Fetch one field of one setting entry.

        Returns:
            The field value as a string, or "" when the field is absent,
            null, or any enclosing scope does not exist.
        """
        self._check_type(category_type)
        leaf = self._categories.get(category_type, {}).get(category_name, {}).get(key)
        if leaf is None:
            return ""
        return _scalar_to_str(leaf.get(field))


def list_category_names(path: Union[str, Path], category_type: str) -> List[str]:
    """One-shot wrapper around SchemaReader.list_category_names."""
    return SchemaReader.load(path).list_category_names(category_type)


def list_item_keys(path: Union[str, Path], category_type: str, category_name: str) -> List[str]:
    """One-shot wrapper around SchemaReader.list_item_keys."""
    return SchemaReader.load(path).list_item_keys(category_type, category_name)


def get_field(path: Union[str, Path], category_type: str, category_name: str, key: str, field: str) -> str:
    """One-shot wrapper around SchemaReader.get_field."""
    return SchemaReader.load(path).get_field(category_type, category_name, key, field)
