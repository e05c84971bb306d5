"""
Read engine - reads the current value of every catalog setting and
optionally compares it against the schema default.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from ..accessors import Accessor
from ..errors import InvalidIdentifierError
from ..schema.catalog import Catalog, SettingDescriptor, CATEGORY_TITLES
from ..schema.reader import CATEGORY_TYPES
from ..ui.console import ConsoleUI


TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


@dataclass
class SettingReading:
    """Current value of one setting."""
    descriptor: SettingDescriptor
    current: str
    matches_default: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "current": self.current,
            "default": self.descriptor.default,
            "description": self.descriptor.description,
        }
        if self.matches_default is not None:
            record["matches_default"] = self.matches_default
        return record


@dataclass
class SettingGroup:
    """Readings for one (category_type, category_name) pair."""
    category_type: str
    category_name: str
    readings: List[SettingReading] = field(default_factory=list)

    @property
    def group_key(self) -> str:
        return self.readings[0].descriptor.group_key if self.readings else ""


@dataclass
class ReadReport:
    """Everything one read pass produced."""
    timestamp: str
    compare: bool = False
    groups: List[SettingGroup] = field(default_factory=list)

    def readings(self) -> Iterator[SettingReading]:
        for group in self.groups:
            yield from group.readings

    @property
    def total(self) -> int:
        return sum(len(g.readings) for g in self.groups)

    @property
    def mismatches(self) -> int:
        return sum(1 for r in self.readings() if r.matches_default is False)

    def to_snapshot_dict(self) -> Dict[str, Any]:
        """Snapshot document: {timestamp, network_settings: {group: {key: record}}}."""
        network_settings: Dict[str, Dict[str, Any]] = {}
        for group in self.groups:
            records = network_settings.setdefault(group.group_key, {})
            for reading in group.readings:
                # First occurrence wins if a key repeats within one group
                records.setdefault(reading.descriptor.key, reading.to_dict())
        return {
            "timestamp": self.timestamp,
            "network_settings": network_settings,
        }


class ReadEngine:
    """Reads current values through the accessor layer. Never mutates."""

    def __init__(
        self,
        catalog: Catalog,
        accessors: Dict[str, Accessor],
        ui: Optional[ConsoleUI] = None,
    ):
        self.catalog = catalog
        self.accessors = accessors
        self.ui = ui or ConsoleUI()

    def read_one(self, descriptor: SettingDescriptor, compare: bool = False) -> SettingReading:
        """
        Read a single setting.

        Raises:
            InvalidIdentifierError: the key is malformed for its accessor
        """
        accessor = self.accessors[descriptor.category_type]
        accessor.validate(descriptor.key)
        current = accessor.read(descriptor.key)
        reading = SettingReading(descriptor=descriptor, current=current)
        if compare:
            reading.matches_default = current == descriptor.default
        return reading

    def collect(self, category_name: Optional[str] = None, compare: bool = False) -> ReadReport:
        """
        Read every setting in catalog order.

        Args:
            category_name: Only read this category name (e.g. "wifi")
            compare: Annotate readings with matches_default

        Returns:
            ReadReport grouped by category
        """
        report = ReadReport(timestamp=utc_timestamp(), compare=compare)

        for category_type in CATEGORY_TYPES:
            self.ui.verbose(f"Reading {CATEGORY_TITLES[category_type].lower()}...")
            names = self.catalog.category_names(category_type)
            if not names:
                self.ui.verbose(f"No {CATEGORY_TITLES[category_type].lower()} found in configuration")
                continue

            for name in names:
                if category_name and name != category_name:
                    continue
                self.ui.verbose(f"Processing category: {name}")

                group = SettingGroup(category_type=category_type, category_name=name)
                for descriptor in self.catalog.settings(category_type, name):
                    try:
                        group.readings.append(self.read_one(descriptor, compare=compare))
                    except InvalidIdentifierError as e:
                        self.ui.verbose(f"Skipping {descriptor.key}: {e}")

                if group.readings:
                    report.groups.append(group)

        return report
