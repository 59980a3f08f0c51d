from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from pydantic import ValidationError

from errwrap.exceptions import ConfigError
from errwrap.rewrite.classifier import build_wrap_forms
from errwrap.rewrite.model import RewriteRule, WrapPolicy
from errwrap.schema import ErrwrapConfigDTO
from errwrap.tooling import ExternalTools
from errwrap.walker import WalkSettings

DEFAULT_CONFIG_NAME = "errwrap.toml"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]

_LIST_KEYS = {
    "wrap": (
        "new_error_prefixes",
        "formatted_error_prefixes",
        "logged_error_prefixes",
    ),
    "walk": ("exclude",),
}


def _load_toml(path: Path, *, required: bool = False) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        if required:
            raise ConfigError(f"cannot read config {path}: {exc}") from exc
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid config {path}: {exc}") from exc
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is not None:
        return _load_toml(config_path, required=True)
    base = root if root is not None else Path.cwd()
    return _load_toml(base / DEFAULT_CONFIG_NAME)


def _section(data: TomlTable, name: str) -> TomlTable:
    section = data.get(name, {})
    return section if isinstance(section, dict) else {}


def _normalize_name_list(value: TomlValue) -> list[str]:
    items: list[str] = []
    if value is None:
        return items
    if isinstance(value, str):
        items = [part.strip() for part in value.split(",") if part.strip()]
    elif isinstance(value, (list, tuple, set)):
        for item in value:
            if isinstance(item, str):
                items.extend([part.strip() for part in item.split(",") if part.strip()])
    return [item for item in items if item]


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged


@dataclass(frozen=True)
class ErrwrapSettings:
    policy: WrapPolicy
    walk: WalkSettings
    tools: ExternalTools


def parse_config(data: TomlTable) -> ErrwrapConfigDTO:
    normalized: TomlTable = {}
    for name in ("wrap", "walk", "tools"):
        section = dict(_section(data, name))
        for key in _LIST_KEYS.get(name, ()):
            if key in section:
                section[key] = _normalize_name_list(section[key])
        normalized[name] = section
    try:
        return ErrwrapConfigDTO.model_validate(normalized)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc


def _normalize_extension(extension: str) -> str:
    extension = extension.strip()
    if extension and not extension.startswith("."):
        return "." + extension
    return extension


def settings_from_config(config: ErrwrapConfigDTO) -> ErrwrapSettings:
    wrap = config.wrap
    policy = WrapPolicy(
        wrap_call=wrap.call,
        family_prefix=wrap.family_prefix,
        forms=build_wrap_forms(
            error_identifier=wrap.error_identifier,
            new_error_prefixes=wrap.new_error_prefixes,
            formatted_error_prefixes=wrap.formatted_error_prefixes,
            logged_error_prefixes=wrap.logged_error_prefixes,
        ),
        suppression_marker=wrap.suppression_marker,
        comment_prefix=wrap.comment_prefix,
    )
    try:
        rules = tuple(RewriteRule.parse(text) for text in config.tools.rules)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc
    if not config.tools.rule_rewriter or not config.tools.import_fixer:
        raise ConfigError("tools.rule_rewriter and tools.import_fixer must name a command")
    return ErrwrapSettings(
        policy=policy,
        walk=WalkSettings(
            extension=_normalize_extension(config.walk.extension),
            exclude=tuple(config.walk.exclude),
        ),
        tools=ExternalTools(
            rule_rewriter=tuple(config.tools.rule_rewriter),
            import_fixer=tuple(config.tools.import_fixer),
            rules=rules,
        ),
    )


def load_settings(
    root: Path | None = None,
    config_path: Path | None = None,
    *,
    overrides: dict[str, TomlTable] | None = None,
) -> ErrwrapSettings:
    data = load_config(root=root, config_path=config_path)
    merged: TomlTable = dict(data)
    for name, payload in (overrides or {}).items():
        merged[name] = merge_payload(payload, _section(data, name))
    return settings_from_config(parse_config(merged))
