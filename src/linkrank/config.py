"""Configuration handling for ranking runs."""

from __future__ import annotations

import json
from dataclasses import fields
from pathlib import Path
from typing import Any, Mapping

from linkrank.engine.guards import validate_config
from linkrank.errors import InvalidParameterError
from linkrank.models import RankConfig

CONFIG_FIELDS = frozenset(item.name for item in fields(RankConfig))


def build_rank_config(base: RankConfig | None = None, **overrides: Any) -> RankConfig:
    unknown = sorted(set(overrides) - CONFIG_FIELDS)
    if unknown:
        raise InvalidParameterError("config", unknown, "unknown option(s)")
    config = (base or RankConfig()).with_overrides(**overrides)
    return validate_config(config)


def rank_config_from_mapping(payload: Mapping[str, Any], base: RankConfig | None = None) -> RankConfig:
    if not isinstance(payload, Mapping):
        raise InvalidParameterError("config", payload, "expected a mapping of option names")
    options = dict(payload)
    personalization = options.get("personalization")
    if personalization is not None and not isinstance(personalization, Mapping):
        raise InvalidParameterError("personalization", personalization, "expected a mapping")
    return build_rank_config(base, **options)


def resolve_config_path(path: Path) -> Path:
    config_path = path.expanduser().resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file does not exist: {config_path}")
    if not config_path.is_file():
        raise IsADirectoryError(f"Config path is not a file: {config_path}")
    return config_path


def load_rank_config(path: Path, base: RankConfig | None = None) -> RankConfig:
    source = resolve_config_path(path)
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidParameterError("config", source.as_posix(), f"malformed JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise InvalidParameterError("config", source.as_posix(), "top-level JSON value must be an object")
    return rank_config_from_mapping(payload, base)
