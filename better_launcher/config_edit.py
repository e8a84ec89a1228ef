from __future__ import annotations

import shutil
from io import StringIO
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from better_launcher.config import ConfigError
from better_launcher.config_model import ConfigModel
from better_launcher.paths import template_config_path


def _yaml() -> YAML:
    y = YAML()
    y.preserve_quotes = True
    y.indent(mapping=2, sequence=4, offset=2)
    return y


def known_keys() -> list[str]:
    """Every settable "section.option" name, in config.yaml order."""
    return [f"{s}.{k}" for s, opts in ConfigModel().model_dump().items() for k in opts]


def _split_key(key: str) -> tuple[str, str]:
    if key not in known_keys():
        raise ConfigError(f"unknown option {key!r} (known: {', '.join(known_keys())})")
    section, option = key.split(".", 1)
    return section, option


def write_default_config(dest: Path, *, overwrite: bool = False) -> bool:
    """Copy the bundled config.yaml to dest. Returns False if dest was kept."""
    if dest.exists() and not overwrite:
        return False
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(template_config_path(), dest)
    return True


def parse_value(text: str) -> Any:
    """Command-line text as a YAML scalar or flow list: "no" -> False, "[a, b]" -> list."""
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError:
        return text


def _load_document(path: Path) -> Any:
    # comments and key order of an existing file are kept; a new one starts from the template
    source = path if path.exists() else template_config_path()
    try:
        with source.open("r", encoding="utf-8") as f:
            doc = _yaml().load(f)
    except (OSError, YAMLError) as e:
        raise ConfigError(f"{source}: {e}") from e
    if doc is None:
        doc = _yaml().load("{}")
    if not isinstance(doc, dict):
        raise ConfigError(f"{source}: top level must be a mapping")
    return doc


def get_value(path: Path, key: str) -> Any:
    """Effective value of one option, defaults included."""
    section, option = _split_key(key)
    doc = _load_document(path) if path.exists() else {}
    try:
        m = ConfigModel.model_validate(doc)
    except ValidationError as e:
        raise ConfigError(f"{path}: {e}") from e
    return getattr(getattr(m, section), option)


def set_value(path: Path, key: str, text: str) -> Any:
    """Change one option in place.

    The edited document is validated before anything is written, so a bad
    value leaves the file exactly as it was. Returns the stored value.
    """
    section, option = _split_key(key)
    doc = _load_document(path)
    if not isinstance(doc.get(section), dict):
        doc[section] = {}
    doc[section][option] = parse_value(text)

    try:
        m = ConfigModel.model_validate(doc)
    except ValidationError as e:
        raise ConfigError(f"{key}={text!r}: {e}") from e

    buf = StringIO()
    _yaml().dump(doc, buf)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(buf.getvalue(), encoding="utf-8")
    tmp.replace(path)
    return getattr(getattr(m, section), option)
