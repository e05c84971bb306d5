"""
Configuration management for android-netcfg.

Supports:
- TOML config files
- Environment variables
- Command-line overrides
- Sensible defaults

Priority (highest to lowest):
1. Command-line arguments
2. Environment variables
3. Config file
4. Defaults
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Mapping

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11

from .errors import ConfigError


# Default config file locations (searched in order)
CONFIG_SEARCH_PATHS = [
    Path.cwd() / "android-netcfg.toml",
    Path.home() / ".config" / "android-netcfg" / "config.toml",
]

ENV_SCHEMA = "NETCFG_SCHEMA"
ENV_BACKUP_DIR = "NETCFG_BACKUP_DIR"
ENV_PROC_ROOT = "NETCFG_PROC_ROOT"
ENV_VERBOSE = "NETCFG_VERBOSE"

TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class PathsConfig:
    """Schema, backup and kernel parameter locations."""
    schema: str = "android-network-keys.json"
    backup_dir: str = "./backups"
    # kernel parameter paths outside this directory are rejected
    proc_root: str = "/proc/sys/net"


@dataclass
class ToolsConfig:
    """Binaries used by the accessors."""
    getprop: str = "getprop"
    setprop: str = "setprop"
    sysctl: str = "sysctl"
    settings: str = "settings"

    def as_mapping(self) -> Dict[str, str]:
        return {
            "getprop": self.getprop,
            "setprop": self.setprop,
            "sysctl": self.sysctl,
            "settings": self.settings,
        }


@dataclass
class ApplyConfig:
    """Apply/restore behaviour."""
    auto_backup: bool = True
    assume_yes: bool = False


@dataclass
class OutputConfig:
    """Output configuration."""
    format: str = "table"
    verbose: bool = False
    quiet: bool = False


@dataclass
class Config:
    """Main configuration container."""
    paths: PathsConfig = field(default_factory=PathsConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    apply: ApplyConfig = field(default_factory=ApplyConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # Source tracking
    _config_file: Optional[Path] = None

    @classmethod
    def load(cls, config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Load configuration from file and environment.

        Args:
            config_path: Explicit path to config file. If None, searches default locations.
            environ: Environment mapping (default: os.environ)

        Returns:
            Config instance with loaded values
        """
        config = cls()

        if config_path:
            path = Path(config_path)
            if not path.exists():
                raise ConfigError(f"Config file not found: {config_path}")
        else:
            path = cls._find_config_file()

        if path:
            config = cls._load_from_file(path)
            config._config_file = path

        config.override_from_env(os.environ if environ is None else environ)
        return config

    @classmethod
    def _find_config_file(cls) -> Optional[Path]:
        """Find config file in default locations."""
        for path in CONFIG_SEARCH_PATHS:
            if path.exists():
                return path
        return None

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load config from TOML file."""
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}")
        except OSError as e:
            raise ConfigError(f"Config file not readable: {path} ({e.strerror})")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        config = cls()

        if "paths" in data:
            paths = data["paths"]
            config.paths = PathsConfig(
                schema=paths.get("schema", config.paths.schema),
                backup_dir=paths.get("backup_dir", config.paths.backup_dir),
                proc_root=paths.get("proc_root", config.paths.proc_root),
            )

        if "tools" in data:
            tools = data["tools"]
            config.tools = ToolsConfig(
                getprop=tools.get("getprop", config.tools.getprop),
                setprop=tools.get("setprop", config.tools.setprop),
                sysctl=tools.get("sysctl", config.tools.sysctl),
                settings=tools.get("settings", config.tools.settings),
            )

        if "apply" in data:
            apply = data["apply"]
            config.apply = ApplyConfig(
                auto_backup=apply.get("auto_backup", config.apply.auto_backup),
                assume_yes=apply.get("assume_yes", config.apply.assume_yes),
            )

        if "output" in data:
            out = data["output"]
            config.output = OutputConfig(
                format=out.get("format", config.output.format),
                verbose=out.get("verbose", config.output.verbose),
                quiet=out.get("quiet", config.output.quiet),
            )

        return config

    def override_from_env(self, environ: Mapping[str, str]) -> "Config":
        """Apply NETCFG_* environment variables."""
        if environ.get(ENV_SCHEMA):
            self.paths.schema = environ[ENV_SCHEMA]
        if environ.get(ENV_BACKUP_DIR):
            self.paths.backup_dir = environ[ENV_BACKUP_DIR]
        if environ.get(ENV_PROC_ROOT):
            self.paths.proc_root = environ[ENV_PROC_ROOT]
        if environ.get(ENV_VERBOSE):
            self.output.verbose = environ[ENV_VERBOSE].strip().lower() in TRUE_VALUES
        return self

    def override_from_args(self, args) -> "Config":
        """
        Override config values from argparse namespace.

        Args with value None are ignored (keeping config file values).
        """
        if getattr(args, "file", None):
            self.paths.schema = args.file
        if getattr(args, "backup_dir", None):
            self.paths.backup_dir = args.backup_dir

        if getattr(args, "output_format", None):
            self.output.format = args.output_format
        if getattr(args, "verbose", None):
            self.output.verbose = True
        if getattr(args, "quiet", None):
            self.output.quiet = True
            self.output.verbose = False

        if getattr(args, "no_backup", None):
            self.apply.auto_backup = False
        if getattr(args, "yes", None):
            self.apply.assume_yes = True

        return self

    def validate(self) -> list:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.paths.schema:
            errors.append("Schema path is required")
        if not self.paths.backup_dir:
            errors.append("Backup directory is required")
        if not self.paths.proc_root.startswith("/"):
            errors.append(f"Kernel parameter root must be an absolute path: {self.paths.proc_root!r}")
        if self.output.format not in ("table", "compact", "json"):
            errors.append(f"Invalid output format: {self.output.format} (must be json, table, or compact)")
        for tool, binary in self.tools.as_mapping().items():
            if not binary:
                errors.append(f"Tool '{tool}' has an empty binary name")

        return errors

    def summary(self, include_config_path: bool = True) -> str:
        """Generate human-readable config summary."""
        lines = []

        if include_config_path:
            if self._config_file:
                lines.append(f"Config: {self._config_file}")
            else:
                lines.append("Config: (defaults)")

        lines.append(f"Schema: {self.paths.schema}")
        lines.append(f"Backups: {self.paths.backup_dir}")
        lines.append(f"Kernel parameters: {self.paths.proc_root}")
        lines.append(f"Auto-backup: {'on' if self.apply.auto_backup else 'off'}")
        lines.append(f"Output: {self.output.format}{' (verbose)' if self.output.verbose else ''}")

        return "\n".join(lines)


EXAMPLE_CONFIG = """# android-netcfg Configuration

[paths]
schema = "android-network-keys.json"
backup_dir = "./backups"
proc_root = "/proc/sys/net"

[tools]
getprop = "getprop"
setprop = "setprop"
sysctl = "sysctl"
settings = "settings"

[apply]
auto_backup = true
assume_yes = false

[output]
format = "table"
verbose = false
quiet = false
"""


def create_example_config(path: str = "android-netcfg.toml") -> Path:
    """Create example config file."""
    target = Path(path)

    if target.exists():
        raise FileExistsError(f"Config file already exists: {path}")

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(EXAMPLE_CONFIG)
    return target
