from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_path, user_state_path


APP_NAME = "better-launcher"
CONFIG_ENV = "LAUNCHER_CONFIG"


@dataclass(frozen=True)
class LauncherPaths:
    config_dir: Path
    state_dir: Path

    @property
    def config_path(self) -> Path:
        return self.config_dir / "config.yaml"

    @property
    def log_path(self) -> Path:
        return self.state_dir / "launcher.log"


def get_paths(*, app_name: str = APP_NAME) -> LauncherPaths:
    cfg = user_config_path(app_name)
    state = user_state_path(app_name)
    return LauncherPaths(config_dir=Path(cfg), state_dir=Path(state))


def template_config_path() -> Path:
    return Path(__file__).resolve().parent / "config.yaml"


def config_candidates(explicit: str | None = None) -> list[Path]:
    """Where config.yaml may live, most specific first.

    An explicit path or $LAUNCHER_CONFIG is the only candidate when given;
    otherwise the XDG config file, then config.yaml in the working directory.
    """
    if explicit:
        return [Path(explicit).expanduser().resolve()]
    env = os.environ.get(CONFIG_ENV)
    if env:
        return [Path(env).expanduser().resolve()]
    return [get_paths().config_path, Path.cwd().resolve() / "config.yaml"]


def find_config_path(explicit: str | None = None) -> Path:
    """First existing candidate, or the first one when none exists yet."""
    candidates = config_candidates(explicit)
    for p in candidates:
        if p.exists():
            return p
    return candidates[0]
