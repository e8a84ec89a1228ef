from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path


log = logging.getLogger(__name__)

FIELD_CODES = ("%f", "%F", "%u", "%U", "%i", "%c", "%k")

_FIRST_WINS_KEYS = ("Name", "Icon", "Exec", "Type")


@dataclass(frozen=True)
class DesktopEntryRecord:
    name: str
    icon_name: str
    exec_template: str
    entry_type: str = "Application"
    no_display: bool = False
    hidden: bool = False
    source_path: Path | None = None


def sanitize_exec(exec_template: str) -> str:
    """Drop the field codes a launcher would normally substitute (%f, %U, ...)."""
    s = exec_template
    prev = None
    # repeat: removing one code can join its neighbours into a new one ("%%ff")
    while s != prev:
        prev = s
        for code in FIELD_CODES:
            s = s.replace(code, "")
    return s.strip()


def build_argv(exec_template: str) -> list[str]:
    # whitespace split only; quoting inside Exec= is not honored
    return sanitize_exec(exec_template).split()


def _is_true(value: str) -> bool:
    return value.lower() == "true"


def parse_desktop_entry(text: str, *, source_path: Path | None = None) -> DesktopEntryRecord | None:
    """Parse the contents of a .desktop file.

    Only the keys the launcher cares about are read. Name/Icon/Exec/Type keep
    their first occurrence, NoDisplay/Hidden latch on any line that says true.
    Returns None for entries that should not be shown.
    """
    found: dict[str, str] = {}
    no_display = False
    hidden = False

    for line in text.splitlines():
        for key in _FIRST_WINS_KEYS:
            prefix = key + "="
            if line.startswith(prefix) and key not in found:
                found[key] = line[len(prefix):]
        if line.startswith("NoDisplay=") and _is_true(line[len("NoDisplay="):]):
            no_display = True
        if line.startswith("Hidden=") and _is_true(line[len("Hidden="):]):
            hidden = True

    if no_display or hidden:
        return None
    if found.get("Type") != "Application":
        return None

    name = found.get("Name")
    icon = found.get("Icon")
    exec_template = found.get("Exec")
    if name is None or icon is None or exec_template is None:
        return None

    return DesktopEntryRecord(
        name=name,
        icon_name=icon,
        exec_template=exec_template,
        entry_type=found["Type"],
        source_path=source_path,
    )


def parse_desktop_file(path: Path) -> DesktopEntryRecord | None:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.debug("skip unreadable entry %s: %s", path, e)
        return None
    return parse_desktop_entry(text, source_path=path)
