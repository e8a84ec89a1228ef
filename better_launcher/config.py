from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from better_launcher.catalog import DEFAULT_EXTENSION, default_search_roots
from better_launcher.config_model import ConfigModel


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class CatalogConfig:
    use_xdg_dirs: bool = True
    extra_dirs: tuple[Path, ...] = ()
    extension: str = DEFAULT_EXTENSION

    def search_roots(self) -> list[Path]:
        roots = default_search_roots() if self.use_xdg_dirs else []
        roots.extend(self.extra_dirs)
        return roots


@dataclass(frozen=True)
class QueryConfig:
    calculator: bool = True


@dataclass(frozen=True)
class LaunchConfig:
    new_session: bool = True


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class Config:
    catalog: CatalogConfig = CatalogConfig()
    query: QueryConfig = QueryConfig()
    launch: LaunchConfig = LaunchConfig()
    logging: LoggingConfig = LoggingConfig()


def load_config(config_path: str | Path | None) -> Config:
    """Read config.yaml; a missing file (or no path) gives the defaults."""
    raw: Any = {}
    if config_path is not None:
        path = Path(config_path).expanduser()
        if path.exists():
            try:
                raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"{path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    try:
        m = ConfigModel.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"{config_path}: {e}") from e

    return Config(
        catalog=CatalogConfig(
            use_xdg_dirs=m.catalog.use_xdg_dirs,
            extra_dirs=tuple(Path(p).expanduser() for p in m.catalog.extra_dirs),
            extension=m.catalog.extension,
        ),
        query=QueryConfig(calculator=m.query.calculator),
        launch=LaunchConfig(new_session=m.launch.new_session),
        logging=LoggingConfig(level=m.logging.level),
    )
