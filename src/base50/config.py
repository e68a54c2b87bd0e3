import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Union

from .alphabet import SKIP_CHARS, is_skippable

CONFIG_PATH = Path.home() / ".base50.json"

ENV_MAPPING: Dict[str, str] = {
    "hex": "BASE50_HEX",
    "history": "BASE50_HISTORY",
    "group_size": "BASE50_GROUP_SIZE",
    "separator": "BASE50_SEPARATOR",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Base50Config:
    hex: bool = False
    history: bool = True
    group_size: int = 0
    separator: str = "_"

    def to_dict(self) -> Dict[str, Union[bool, int, str]]:
        return {
            "hex": self.hex,
            "history": self.history,
            "group_size": self.group_size,
            "separator": self.separator,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Base50Config":
        return cls(
            hex=_coerce_bool(data.get("hex", False)),
            history=_coerce_bool(data.get("history", True)),
            group_size=int(data.get("group_size", 0) or 0),
            separator=str(data.get("separator", "_") or "_"),
        )

    def validate(self) -> None:
        if self.group_size < 0:
            raise ValueError(f"group_size must be >= 0, got {self.group_size}")
        if not is_skippable(self.separator):
            raise ValueError(f"separator must be one of {SKIP_CHARS!r}, got {self.separator!r}")


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _coerce_bool(value: object) -> bool:
    # JSON files written by hand may hold "false" instead of false.
    if isinstance(value, str):
        return _parse_bool(value)
    return bool(value)


def _merge_env(cfg: Base50Config) -> Base50Config:
    for field_name, env_var in ENV_MAPPING.items():
        env_val = os.getenv(env_var, "")
        if not env_val:
            continue
        try:
            if field_name in ("hex", "history"):
                setattr(cfg, field_name, _parse_bool(env_val))
            elif field_name == "group_size":
                cfg.group_size = int(env_val)
            else:
                cfg.separator = env_val
        except ValueError as exc:
            raise ValueError(f"Invalid {env_var}: {exc}") from exc
    return cfg


def load_config(path: Path = CONFIG_PATH, use_env: bool = True) -> Base50Config:
    """
    Load CLI defaults from `path`, then apply BASE50_* environment variables.

    A missing or malformed file yields the defaults; an invalid environment
    value raises ValueError.
    """
    config = Base50Config()
    if path.exists():
        try:
            loaded = Base50Config.from_dict(json.loads(path.read_text(encoding="utf-8")))
            loaded.validate()
            config = loaded
        except (OSError, ValueError, TypeError, AttributeError):
            # Fall back to defaults if the file is malformed.
            pass
    if use_env:
        config = _merge_env(config)
        config.validate()
    return config


def save_config(config: Base50Config, path: Path = CONFIG_PATH) -> None:
    config.validate()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
