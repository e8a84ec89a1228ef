from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from platformdirs import site_data_path, user_data_path

from better_launcher.desktop_entry import DesktopEntryRecord, parse_desktop_file


log = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".desktop"


@dataclass(frozen=True)
class CatalogItem:
    name: str
    launch_command: str
    icon_name: str | None = None
    source_path: Path | None = None


@dataclass
class Catalog:
    """Applications in discovery order plus a name -> command lookup.

    The lookup is last-seen-wins: when two entry files share a display name,
    the one added later decides which command runs.
    """

    items: list[CatalogItem] = field(default_factory=list)
    _commands: dict[str, str] = field(default_factory=dict, repr=False)

    def add(self, item: CatalogItem) -> None:
        self.items.append(item)
        self._commands[item.name] = item.launch_command

    def add_record(self, record: DesktopEntryRecord) -> None:
        self.add(
            CatalogItem(
                name=record.name,
                launch_command=record.exec_template,
                icon_name=record.icon_name,
                source_path=record.source_path,
            )
        )

    def command_for(self, name: str) -> str | None:
        return self._commands.get(name)

    def names(self) -> list[str]:
        return [it.name for it in self.items]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[CatalogItem]:
        return iter(self.items)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "Catalog":
        cat = cls()
        for name, cmd in pairs:
            cat.add(CatalogItem(name=name, launch_command=cmd))
        return cat


def default_search_roots() -> list[Path]:
    """XDG data home first, then every XDG data dir, each with /applications."""
    roots = [Path(user_data_path()) / "applications"]
    for d in str(site_data_path(multipath=True)).split(os.pathsep):
        if d:
            roots.append(Path(d) / "applications")
    return roots


def _is_file_or_dir(path: Path) -> tuple[bool, bool] | None:
    # stat() on an unreadable parent raises instead of answering False
    try:
        if path.is_file():
            return True, False
        return False, path.is_dir()
    except OSError as e:
        log.debug("skip %s: %s", path, e)
        return None


def _collect(directory: Path, extension: str, out: list[Path]) -> None:
    try:
        children = list(directory.iterdir())
    except OSError as e:
        log.debug("skip directory %s: %s", directory, e)
        return
    for child in children:
        kind = _is_file_or_dir(child)
        if kind is None:
            continue
        is_file, is_dir = kind
        if is_file and child.name.endswith(extension):
            out.append(child)
        elif is_dir:
            # symlinked directories are followed; cycles are not detected
            _collect(child, extension, out)


def collect_entry_files(search_roots: Iterable[Path], *, extension: str = DEFAULT_EXTENSION) -> list[Path]:
    """Every entry file under the roots, sorted, with duplicate paths removed."""
    files: list[Path] = []
    for root in search_roots:
        root = Path(root)
        kind = _is_file_or_dir(root)
        if kind is None or not kind[1]:
            log.debug("search root missing: %s", root)
            continue
        _collect(root, extension, files)

    files.sort()
    deduped: list[Path] = []
    for p in files:
        if deduped and deduped[-1] == p:
            continue
        deduped.append(p)
    return deduped


def build_catalog(search_roots: Iterable[Path], *, extension: str = DEFAULT_EXTENSION) -> Catalog:
    catalog = Catalog()
    files = collect_entry_files(search_roots, extension=extension)
    for path in files:
        record = parse_desktop_file(path)
        if record is None:
            continue
        catalog.add_record(record)
    log.debug("catalog: %d applications from %d entry files", len(catalog), len(files))
    return catalog
