import pytest

from better_launcher.catalog import Catalog
from better_launcher.query import (
    CALCULATOR_ICON,
    CommitAction,
    apply_query,
    commit_label,
    navigate,
    resolve_commit,
    result_from_label,
)


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.from_pairs(
        [
            ("Firefox", "firefox %u"),
            ("Files", "nautilus --new-window"),
            ("Terminal", "foot"),
            ("LibreOffice Calc", "libreoffice --calc %U"),
        ]
    )


def _labels(result):
    return [it.label for it in result.items]


def test_empty_query_shows_everything_in_order(catalog):
    r = apply_query(catalog, "")
    assert _labels(r) == catalog.names()
    assert r.selection == 0
    assert r.synthetic is None


def test_empty_query_on_empty_catalog():
    r = apply_query(Catalog(), "")
    assert r.items == []
    assert r.selection is None


def test_substring_is_case_insensitive(catalog):
    assert _labels(apply_query(catalog, "fI")) == ["Firefox", "Files", "LibreOffice Calc"]
    assert _labels(apply_query(catalog, "FIL")) == ["Files"]
    assert _labels(apply_query(catalog, "CALC")) == ["LibreOffice Calc"]
    assert _labels(apply_query(catalog, "office c")) == ["LibreOffice Calc"]


def test_no_match_gives_empty_view(catalog):
    r = apply_query(catalog, "banana")
    assert r.items == []
    assert r.selection is None
    assert r.synthetic is None


def test_arithmetic_row_comes_first(catalog):
    r = apply_query(catalog, "7/2")
    assert _labels(r) == ["7/2 = 3.5"]
    assert r.selection == 0
    assert r.synthetic is not None
    assert r.synthetic.result == "3.5"
    assert r.synthetic.icon_name == CALCULATOR_ICON
    assert r.items[0].is_synthetic


def test_arithmetic_row_plus_name_matches():
    cat = Catalog.from_pairs([("Calc 2", "calc2"), ("Other", "other")])
    r = apply_query(cat, "2")
    assert _labels(r) == ["2 = 2", "Calc 2"]


def test_calculator_can_be_disabled():
    cat = Catalog.from_pairs([("Calc 2", "calc2")])
    r = apply_query(cat, "2", calc_enabled=False)
    assert _labels(r) == ["Calc 2"]


def test_selection_resets_to_first_row(catalog):
    r = apply_query(catalog, "fi")
    assert navigate(r, 0, "down") == 1
    r = apply_query(catalog, "terminal")
    assert r.selection == 0
    assert navigate(r, 1, "down") == 0


def test_navigate_zero_does_not_move(catalog):
    r = apply_query(catalog, "")
    assert navigate(r, 2, 0) == 2
    assert navigate(r, None, 0) is None
    assert navigate(r, 7, 0) is None
    assert navigate(r, 7, 1) == 0


def test_navigate_clamps(catalog):
    r = apply_query(catalog, "")
    assert navigate(r, 0, "down") == 1
    assert navigate(r, 3, "down") == 3
    assert navigate(r, 0, "up") == 0
    assert navigate(r, 2, -1) == 1
    assert navigate(r, None, "down") == 0
    assert navigate(apply_query(catalog, "zzz"), None, "down") is None


def test_navigate_rejects_unknown_direction(catalog):
    with pytest.raises(ValueError):
        navigate(apply_query(catalog, ""), 0, "sideways")


def test_commit_selected_app(catalog):
    r = apply_query(catalog, "term")
    assert resolve_commit(catalog, r, r.selection) == CommitAction(kind="launch", value="foot", label="Terminal")


def test_commit_selected_result_row(catalog):
    r = apply_query(catalog, "3*3")
    action = resolve_commit(catalog, r, r.selection)
    assert action is not None
    assert action.kind == "copy"
    assert action.value == "9"


def test_commit_without_selection_uses_query_value(catalog):
    r = apply_query(catalog, "3*3")
    assert resolve_commit(catalog, r, None) == CommitAction(kind="copy", value="9", label="3*3")


def test_commit_without_selection_falls_back_to_first_row(catalog):
    r = apply_query(catalog, "fi")
    action = resolve_commit(catalog, r, None)
    assert action is not None
    assert action.kind == "launch"
    assert action.value == "firefox %u"


def test_commit_nothing(catalog):
    assert resolve_commit(catalog, apply_query(catalog, "banana"), None) is None


def test_commit_duplicate_name_uses_last_command():
    cat = Catalog.from_pairs([("Editor", "gedit"), ("Editor", "kate")])
    r = apply_query(cat, "edit")
    assert _labels(r) == ["Editor", "Editor"]
    assert resolve_commit(cat, r, 0).value == "kate"


def test_result_from_label():
    assert result_from_label("7/2 = 3.5") == "3.5"
    assert result_from_label("Firefox") is None


def test_commit_label(catalog):
    assert commit_label(catalog, "2+2 = 4") == CommitAction(kind="copy", value="4", label="2+2 = 4")
    assert commit_label(catalog, "Terminal").value == "foot"
    assert commit_label(catalog, "Unknown") is None
