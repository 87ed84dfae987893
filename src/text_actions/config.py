# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Configuration management for Text Actions.

Loads application settings from ~/.text-actions/config.toml with sensible defaults.
Provider, model and language choices live in the JSON settings file instead
(see text_actions.settings); this file only says where that file is and how
the app talks to the network.
"""

import fcntl
import os
import re
import sys
import threading
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Optional

CONFIG_DIR = Path.home() / ".text-actions"
CONFIG_FILE = CONFIG_DIR / "config.toml"

DEFAULT_SETTINGS_FILE = "~/.text-actions/settings.json"

# Default configuration
DEFAULT_CONFIG = """# Text Actions Configuration
# Edit this file to customize behavior

[settings]
# Where providers, model and language choices are stored (JSON)
file = "~/.text-actions/settings.json"

[http]
# Completion request timeout in seconds (0 = no limit)
timeout = 60

# Timeout for model listing and provider checks in seconds
check_timeout = 5

[log]
# Print debug lines (request sizes, step timings)
debug = false
"""


@dataclass
class SettingsConfig:
    """Location of the JSON settings file."""
    file: str = DEFAULT_SETTINGS_FILE


@dataclass
class HttpConfig:
    """Network timeouts for the LLM gateway."""
    timeout: float = 60
    check_timeout: float = 5


@dataclass
class LogConfig:
    """Console logging options."""
    debug: bool = False


@dataclass
class Config:
    """Main configuration container."""
    settings: SettingsConfig = field(default_factory=SettingsConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    log: LogConfig = field(default_factory=LogConfig)


def load_config() -> Config:
    """Load configuration from file, creating default if missing."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    try:
        CONFIG_DIR.chmod(0o700)
    except OSError:
        pass

    # Create default config if it doesn't exist
    if not CONFIG_FILE.exists():
        CONFIG_FILE.write_text(DEFAULT_CONFIG, encoding='utf-8')

    # Load and parse config
    data = {}
    try:
        with open(CONFIG_FILE, 'rb') as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        print(f"Config parse error: {e}", file=sys.stderr)

    # Build config object with defaults
    config = Config()

    # Settings file location
    if 'settings' in data:
        config.settings = SettingsConfig(
            file=data['settings'].get('file', config.settings.file),
        )

    # HTTP settings
    if 'http' in data:
        config.http = HttpConfig(
            timeout=data['http'].get('timeout', config.http.timeout),
            check_timeout=data['http'].get('check_timeout', config.http.check_timeout),
        )

    # Log settings
    if 'log' in data:
        config.log = LogConfig(
            debug=data['log'].get('debug', config.log.debug),
        )

    # Validate and sanitize config values
    _validate_config(config)

    return config


def _validate_config(config: Config):
    """Validate and sanitize configuration values."""
    if not isinstance(config.settings.file, str) or not config.settings.file.strip():
        print(f"Config warning: Invalid settings file '{config.settings.file}', using default", file=sys.stderr)
        config.settings.file = DEFAULT_SETTINGS_FILE

    if not isinstance(config.http.timeout, (int, float)) or isinstance(config.http.timeout, bool) \
            or config.http.timeout < 0:
        print("Config warning: http timeout must be a non-negative number, using 60", file=sys.stderr)
        config.http.timeout = 60

    if not isinstance(config.http.check_timeout, (int, float)) or isinstance(config.http.check_timeout, bool) \
            or config.http.check_timeout <= 0:
        print("Config warning: http check_timeout must be positive, using 5", file=sys.stderr)
        config.http.check_timeout = 5

    if not isinstance(config.log.debug, bool):
        print("Config warning: log debug must be true or false, using false", file=sys.stderr)
        config.log.debug = False


def resolve_settings_path(config: Optional[Config] = None) -> Path:
    """Absolute path of the JSON settings file, with ~ expanded."""
    config = config or get_config()
    return Path(config.settings.file).expanduser()


# Global config instance with thread-safe initialization
_config: Optional[Config] = None
_config_lock = threading.Lock()


def get_config() -> Config:
    """Get the global configuration instance (thread-safe)."""
    global _config
    if _config is None:
        with _config_lock:
            # Double-check locking pattern for thread safety
            if _config is None:
                _config = load_config()
    return _config


# ---------------------------------------------------------------------------
# TOML section helpers
# ---------------------------------------------------------------------------

def _replace_in_section(content: str, section: str, key: str, new_value: str) -> str:
    """Replace a key's value within a specific TOML section.

    new_value must already be serialized to its TOML string representation
    (e.g. '"quoted"' for strings, 'true'/'false' for bools, '42' for ints).

    If the key doesn't exist in the section, it is appended under the header.
    """
    lines = content.splitlines(keepends=True)
    in_section = False
    section_header_idx = None
    patterns = (
        rf'^(\s*{key}\s*=\s*)"[^"]*"',
        rf'^(\s*{key}\s*=\s*)(true|false)',
        rf'^(\s*{key}\s*=\s*)[-+]?[0-9]*\.?[0-9]+',
    )
    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith("[") and stripped.endswith("]"):
            in_section = stripped == f"[{section}]"
            if in_section:
                section_header_idx = i
            continue
        if in_section:
            for pattern in patterns:
                new_line = re.sub(pattern, lambda m: m.group(1) + new_value, line)
                if new_line != line:
                    lines[i] = new_line
                    return "".join(lines)

    # Key not found in section - append it after the section header
    if section_header_idx is not None:
        lines.insert(section_header_idx + 1, f"{key} = {new_value}\n")
        return "".join(lines)

    # Section not found at all - append a new section at the end of the file
    lines.append(f"\n[{section}]\n")
    lines.append(f"{key} = {new_value}\n")
    return "".join(lines)


def _serialize_toml_value(value) -> str:
    """Serialize a Python value to its TOML string representation."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    # String: escape backslashes and quotes, wrap in double quotes
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def update_config_field(section: str, key: str, value) -> bool:
    """Persist one config field to config.toml.

    value may be a bool, int, float, or str. Unknown section.key pairs are
    refused so a typo never lands in the file.
    """
    section_obj = getattr(Config(), section, None)
    if not is_dataclass(section_obj) or key not in {f.name for f in fields(section_obj)}:
        print(f"Config write failed: unknown field {section}.{key}", file=sys.stderr)
        return False
    try:
        fd = os.open(str(CONFIG_FILE), os.O_RDWR | os.O_CREAT, 0o644)
        try:
            fcntl.flock(fd, fcntl.LOCK_EX)
            content = CONFIG_FILE.read_text(encoding='utf-8')
            content = _replace_in_section(content, section, key, _serialize_toml_value(value))
            CONFIG_FILE.write_text(content, encoding='utf-8')
        finally:
            fcntl.flock(fd, fcntl.LOCK_UN)
            os.close(fd)
        return True
    except OSError as e:
        print(f"Config write failed: {e}", file=sys.stderr)
        return False
