from pathlib import Path

from better_launcher import catalog as catalog_mod
from better_launcher.catalog import Catalog, build_catalog, collect_entry_files, default_search_roots


def _entry(name: str, exec_line: str, icon: str = "app", extra: str = "") -> str:
    return f"[Desktop Entry]\nType=Application\nName={name}\nIcon={icon}\nExec={exec_line}\n{extra}"


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_collects_recursively_and_sorts(tmp_path: Path):
    root = tmp_path / "applications"
    b = _write(root / "b.desktop", _entry("B", "b"))
    a = _write(root / "kde" / "a.desktop", _entry("A", "a"))
    _write(root / "notes.txt", "Name=ignored")
    _write(root / "deep" / "er" / "c.desktop", _entry("C", "c"))

    files = collect_entry_files([root])
    assert files == sorted(files)
    assert b in files and a in files
    assert len(files) == 3


def test_missing_roots_are_skipped(tmp_path: Path):
    root = tmp_path / "applications"
    _write(root / "a.desktop", _entry("A", "a"))
    cat = build_catalog([tmp_path / "nope", root, tmp_path / "also-nope"])
    assert cat.names() == ["A"]


def test_same_path_via_two_roots_counts_once(tmp_path: Path):
    root = tmp_path / "applications"
    _write(root / "editor.desktop", _entry("Editor", "gedit"))
    cat = build_catalog([root, tmp_path / "applications", root])
    assert cat.names() == ["Editor"]
    assert len(cat) == 1


def test_catalog_order_follows_paths_not_names(tmp_path: Path):
    root = tmp_path / "applications"
    _write(root / "a.desktop", _entry("Zed", "zed"))
    _write(root / "b.desktop", _entry("Alacritty", "alacritty"))
    cat = build_catalog([root])
    assert cat.names() == ["Zed", "Alacritty"]


def test_duplicate_name_resolves_to_last_path(tmp_path: Path):
    first = _write(tmp_path / "one" / "applications" / "editor.desktop", _entry("Editor", "gedit %U"))
    last = _write(tmp_path / "two" / "applications" / "editor.desktop", _entry("Editor", "kate %U"))
    assert first < last
    # root order does not matter, path order does
    cat = build_catalog([last.parent, first.parent])
    assert cat.command_for("Editor") == "kate %U"


def test_filtered_entries_do_not_appear(tmp_path: Path):
    root = tmp_path / "applications"
    _write(root / "a.desktop", _entry("Shown", "shown"))
    _write(root / "b.desktop", _entry("Hidden", "hidden", extra="NoDisplay=true"))
    _write(root / "c.desktop", "[Desktop Entry]\nType=Application\nName=NoIcon\nExec=x\n")
    _write(root / "d.desktop", b"\xff\xfe".decode("latin-1"))
    cat = build_catalog([root])
    assert cat.names() == ["Shown"]


def test_raw_exec_template_is_stored(tmp_path: Path):
    root = tmp_path / "applications"
    _write(root / "ff.desktop", _entry("Firefox", "firefox %u", icon="firefox"))
    item = build_catalog([root]).items[0]
    assert item.launch_command == "firefox %u"
    assert item.icon_name == "firefox"


def test_custom_extension(tmp_path: Path):
    root = tmp_path / "apps"
    _write(root / "a.entry", _entry("A", "a"))
    _write(root / "b.desktop", _entry("B", "b"))
    assert build_catalog([root], extension=".entry").names() == ["A"]


def test_from_pairs_last_wins():
    cat = Catalog.from_pairs([("Editor", "gedit"), ("Term", "foot"), ("Editor", "kate")])
    assert cat.names() == ["Editor", "Term", "Editor"]
    assert cat.command_for("Editor") == "kate"
    assert cat.command_for("Nope") is None


def test_default_search_roots(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(catalog_mod, "user_data_path", lambda: tmp_path / "home")
    monkeypatch.setattr(catalog_mod, "site_data_path", lambda multipath: Path("/usr/local/share:/usr/share"))
    assert default_search_roots() == [
        tmp_path / "home" / "applications",
        Path("/usr/local/share/applications"),
        Path("/usr/share/applications"),
    ]


def test_unreadable_subdirectory_is_skipped(tmp_path: Path, monkeypatch):
    root = tmp_path / "applications"
    _write(root / "a.desktop", _entry("A", "a"))
    _write(root / "locked" / "x.desktop", _entry("X", "x"))
    _write(tmp_path / "locked-root" / "y.desktop", _entry("Y", "y"))

    real_is_file, real_is_dir = Path.is_file, Path.is_dir

    def _denied(real):
        def check(self):
            if any(part.startswith("locked") for part in self.parts):
                raise PermissionError(13, "Permission denied", str(self))
            return real(self)

        return check

    monkeypatch.setattr(Path, "is_file", _denied(real_is_file))
    monkeypatch.setattr(Path, "is_dir", _denied(real_is_dir))

    assert build_catalog([root, tmp_path / "locked-root"]).names() == ["A"]
