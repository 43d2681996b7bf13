"""Environment-driven runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX

DEFAULT_DATA_FILE = "~/.local/share/playlister/playlists.json"


@dataclass(frozen=True, slots=True)
class Settings:
    data_file: Path
    log_preset: Optional[str] = None
    use_defaults: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        raw_path = env.get(f"{ENV_PREFIX}DATA_FILE") or DEFAULT_DATA_FILE
        preset = env.get(f"{ENV_PREFIX}LOG_PRESET") or None
        use_defaults = env.get(f"{ENV_PREFIX}NO_DEFAULTS", "").lower() not in {
            "1",
            "true",
            "yes",
            "on",
        }
        return cls(
            data_file=Path(raw_path).expanduser(),
            log_preset=preset,
            use_defaults=use_defaults,
        )


__all__ = ["Settings", "DEFAULT_DATA_FILE"]
