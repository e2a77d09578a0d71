"""Filesystem configuration helpers (env-first, YAML file optional)."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from functools import cached_property
from pathlib import Path
from typing import Any

import yaml

from swiftfs_core.errors import ConfigurationError
from swiftfs_core.io.uri import FilesystemUri, parse_filesystem_uri

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LIST_PAGE_SIZE = 10000


@dataclass(frozen=True)
class SwiftFSConfig:
    """Connection and behaviour settings for one filesystem root.

    Instances are passed explicitly to stores and transports; nothing here is
    process-global, so several roots can coexist in one process.
    """

    root_uri: str
    storage_url: str | None = None
    auth_token: str | None = None
    endpoints_url: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    list_page_size: int = DEFAULT_LIST_PAGE_SIZE
    strict_rename: bool = False
    newest_reads: bool = True

    def __post_init__(self) -> None:
        parse_filesystem_uri(self.root_uri)
        if self.timeout_seconds <= 0:
            raise ConfigurationError("timeout_seconds must be positive")
        if self.list_page_size <= 0:
            raise ConfigurationError("list_page_size must be positive")

    @cached_property
    def filesystem(self) -> FilesystemUri:
        return parse_filesystem_uri(self.root_uri)

    @property
    def container(self) -> str:
        return self.filesystem.container


def _parse_bool(value: str | None, *, default: bool | None = None) -> bool | None:
    if value is None:
        return default
    text = value.strip().lower()
    if text in {"1", "true", "yes", "y"}:
        return True
    if text in {"0", "false", "no", "n"}:
        return False
    return default


def _parse_number(name: str, value: Any, cast: type) -> Any:
    try:
        return cast(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc


def build_swift_config_from_env(env: dict[str, str] | None = None) -> SwiftFSConfig:
    """Resolve filesystem config from ``SWIFT_*`` environment variables."""

    if env is None:
        env = dict(os.environ)
    root_uri = (env.get("SWIFT_FS_URI") or "").strip()
    if not root_uri:
        raise ConfigurationError("Missing filesystem configuration: set SWIFT_FS_URI")

    strict_rename = _parse_bool(env.get("SWIFT_STRICT_RENAME"), default=False)
    newest_reads = _parse_bool(env.get("SWIFT_NEWEST_READS"), default=True)

    return SwiftFSConfig(
        root_uri=root_uri,
        storage_url=(env.get("SWIFT_STORAGE_URL") or "").strip() or None,
        auth_token=(env.get("SWIFT_AUTH_TOKEN") or "").strip() or None,
        endpoints_url=(env.get("SWIFT_ENDPOINTS_URL") or "").strip() or None,
        timeout_seconds=_parse_number(
            "SWIFT_TIMEOUT", env.get("SWIFT_TIMEOUT") or DEFAULT_TIMEOUT_SECONDS, float
        ),
        list_page_size=_parse_number(
            "SWIFT_LIST_PAGE_SIZE", env.get("SWIFT_LIST_PAGE_SIZE") or DEFAULT_LIST_PAGE_SIZE, int
        ),
        strict_rename=bool(strict_rename),
        newest_reads=bool(newest_reads),
    )


def load_swift_config(path: str | Path) -> SwiftFSConfig:
    """Load a YAML mapping whose keys are ``SwiftFSConfig`` fields."""

    config_path = Path(path)
    try:
        with config_path.open("r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {config_path}") from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping")

    known = {f.name for f in fields(SwiftFSConfig)}
    unknown = sorted(set(payload) - known)
    if unknown:
        raise ConfigurationError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")
    if "root_uri" not in payload:
        raise ConfigurationError(f"{config_path} must define root_uri")

    values = dict(payload)
    if "timeout_seconds" in values:
        values["timeout_seconds"] = _parse_number(
            "timeout_seconds", values["timeout_seconds"], float
        )
    if "list_page_size" in values:
        values["list_page_size"] = _parse_number("list_page_size", values["list_page_size"], int)
    for flag in ("strict_rename", "newest_reads"):
        if flag in values and isinstance(values[flag], str):
            parsed = _parse_bool(values[flag])
            if parsed is None:
                raise ConfigurationError(f"{flag} must be a boolean, got {values[flag]!r}")
            values[flag] = parsed
    return SwiftFSConfig(**values)
