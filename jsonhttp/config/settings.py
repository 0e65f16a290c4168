"""Settings loader for the jsonhttp demo server.

Settings are layered, lowest priority first: DEFAULT_CONFIG, the INI file
(jsonhttp.ini) and the JSON overrides file (jsonhttp-settings.json). The
merged result is validated into a ServerSettings value.
"""

from __future__ import annotations

import configparser
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from jsonhttp.config.defaults import DEFAULT_CONFIG, DEFAULT_INI_TEMPLATE
from jsonhttp.utils.logging import LOGGING_LEVELS, log

INI_FILENAME = "jsonhttp.ini"
JSON_FILENAME = "jsonhttp-settings.json"


@dataclass(frozen=True)
class ServerSettings:
    """Validated demo server settings."""

    host: str = DEFAULT_CONFIG["host"]
    port: int = DEFAULT_CONFIG["port"]
    logging_level: str = DEFAULT_CONFIG["loggingLevel"]
    content_type: str = DEFAULT_CONFIG["contentType"]


def _write_default_ini(ini_file: Path) -> None:
    try:
        ini_file.parent.mkdir(parents=True, exist_ok=True)
        ini_file.write_text(DEFAULT_INI_TEMPLATE, encoding="utf-8")
        log(f"[Settings] Generated default INI: {ini_file}")
    except OSError as e:
        log(f"[Settings] Error generating default INI: {e}", level="ERROR")


def _read_ini(ini_file: Path) -> Dict[str, str]:
    parser = configparser.ConfigParser()
    # keep camelCase keys as written
    parser.optionxform = str
    values: Dict[str, str] = {}
    try:
        parser.read(ini_file, encoding="utf-8")
        for section in parser.sections():
            values.update(parser.items(section))
    except configparser.Error as e:
        log(f"[Settings] Error loading INI: {e}", level="ERROR")
    return values


def _read_json(json_file: Path) -> Dict[str, Any]:
    if not json_file.exists():
        return {}
    try:
        with open(json_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        log(f"[Settings] Error loading JSON: {e}", level="ERROR")
        return {}
    if not isinstance(data, dict):
        log(f"[Settings] Ignoring {json_file}: expected a JSON object", level="ERROR")
        return {}
    return data


def _validated(raw: Dict[str, Any]) -> ServerSettings:
    host = str(raw.get("host") or DEFAULT_CONFIG["host"])

    port = raw.get("port")
    try:
        port = int(port)
        if isinstance(raw.get("port"), bool) or not 0 <= port <= 65535:
            raise ValueError(port)
    except (TypeError, ValueError):
        log(f"[Settings] Invalid port {raw.get('port')!r}, using {DEFAULT_CONFIG['port']}", level="WARNING")
        port = DEFAULT_CONFIG["port"]

    level = str(raw.get("loggingLevel") or "").upper()
    if level not in LOGGING_LEVELS:
        log(f"[Settings] Unknown logging level {raw.get('loggingLevel')!r}, using INFO", level="WARNING")
        level = "INFO"

    content_type = raw.get("contentType")
    if not isinstance(content_type, str) or not content_type.strip():
        content_type = DEFAULT_CONFIG["contentType"]

    return ServerSettings(host=host, port=port, logging_level=level, content_type=content_type)


def load_settings(config_dir: Path) -> ServerSettings:
    """Load settings from a configuration directory.

    A missing INI file is generated from DEFAULT_INI_TEMPLATE. Unreadable
    files are logged and skipped; invalid values fall back to the defaults.

    Args:
        config_dir: Directory containing configuration files.

    Returns:
        The validated settings.
    """
    config_dir = Path(config_dir)
    ini_file = config_dir / INI_FILENAME

    if not ini_file.exists():
        log("[Settings] INI file not found, generating defaults...")
        _write_default_ini(ini_file)

    raw: Dict[str, Any] = dict(DEFAULT_CONFIG)
    raw.update(_read_ini(ini_file))
    raw.update(_read_json(config_dir / JSON_FILENAME))
    return _validated(raw)
