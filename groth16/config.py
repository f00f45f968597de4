"""
groth16.config
==============

Runtime settings for the command line tool and batch verification, plus
logging setup.

Settings come from (lowest to highest precedence):
  1. defaults below
  2. an optional JSON or YAML file (`load_settings(path)`)
  3. environment variables:
       GROTH16_BATCH_SIZE   int   number of times each proof is verified
       GROTH16_MAX_WORKERS  int   worker count for verify_batch (0 = executor default)
       GROTH16_EXECUTOR     str   "thread" | "process"
       GROTH16_LOG_LEVEL    str   DEBUG / INFO / WARNING / ...
       GROTH16_LOG          flag  enable logging output at all

License: MIT
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

_EXECUTORS = ("thread", "process")


def env_flag(name: str, default: bool = False) -> bool:
    """
    Read an environment flag in a truthy/falsey way: "1", "true", "yes", "on" -> True.
    """
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    batch_size: int = 1
    max_workers: int = 0
    executor: str = "thread"
    log_level: str = "WARNING"
    log_enabled: bool = False

    def __post_init__(self) -> None:
        for name in ("batch_size", "max_workers"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise ValueError(f"{name} must be an integer, got {v!r}")
        for name in ("executor", "log_level"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string, got {getattr(self, name)!r}")
        if not isinstance(self.log_enabled, bool):
            raise ValueError(f"log_enabled must be true or false, got {self.log_enabled!r}")
        if self.batch_size < 0:
            raise ValueError(f"batch_size must be >= 0, got {self.batch_size}")
        if self.max_workers < 0:
            raise ValueError(f"max_workers must be >= 0, got {self.max_workers}")
        if self.executor not in _EXECUTORS:
            raise ValueError(f"executor must be one of {_EXECUTORS}, got {self.executor!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown settings: {', '.join(sorted(map(str, unknown)))}")
        return cls(**dict(data))

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_SETTINGS = Settings()


def _read_file(p: Path) -> Mapping[str, Any]:
    text = p.read_text(encoding="utf-8")
    if text.lstrip().startswith("{"):
        data = json.loads(text)
    else:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{p}: malformed YAML: {e}") from e
    if not isinstance(data, Mapping):
        raise ValueError(f"{p}: settings must be a mapping")
    return data


def _env_overrides() -> dict:
    out: dict = {}
    if os.getenv("GROTH16_BATCH_SIZE"):
        out["batch_size"] = int(os.environ["GROTH16_BATCH_SIZE"])
    if os.getenv("GROTH16_MAX_WORKERS"):
        out["max_workers"] = int(os.environ["GROTH16_MAX_WORKERS"])
    if os.getenv("GROTH16_EXECUTOR"):
        out["executor"] = os.environ["GROTH16_EXECUTOR"].strip().lower()
    if os.getenv("GROTH16_LOG_LEVEL"):
        out["log_level"] = os.environ["GROTH16_LOG_LEVEL"].strip().upper()
        out["log_enabled"] = True
    if os.getenv("GROTH16_LOG") is not None:
        out["log_enabled"] = env_flag("GROTH16_LOG")
    return out


def load_settings(
    path: Optional[Union[str, Path]] = None, *, fallback: Settings = DEFAULT_SETTINGS
) -> Settings:
    """
    Build Settings from an optional JSON/YAML file and the environment.

    A missing file is an error when a path is given explicitly.
    """
    settings = fallback
    if path is not None:
        settings = Settings.from_mapping({**settings.to_dict(), **_read_file(Path(path))})
    overrides = _env_overrides()
    if overrides:
        settings = replace(settings, **overrides)
    return settings


def configure_logging(settings: Settings = DEFAULT_SETTINGS, *, force: bool = False) -> None:
    """
    Configure basic logging for groth16.* loggers when enabled.
    """
    if not (settings.log_enabled or force):
        return
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("groth16").setLevel(level)


__all__ = [
    "Settings",
    "DEFAULT_SETTINGS",
    "env_flag",
    "load_settings",
    "configure_logging",
]
