from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from better_launcher.calc import evaluate_expression
from better_launcher.catalog import Catalog


CALCULATOR_ICON = "accessories-calculator"
RESULT_SEPARATOR = " = "


@dataclass(frozen=True)
class VisibleItem:
    label: str
    icon_name: str | None = None
    launch_command: str | None = None
    is_synthetic: bool = False
    result: str | None = None


@dataclass(frozen=True)
class QueryResult:
    query: str
    items: list[VisibleItem] = field(default_factory=list)
    selection: int | None = None
    synthetic: VisibleItem | None = None


@dataclass(frozen=True)
class CommitAction:
    kind: Literal["launch", "copy"]
    value: str
    label: str = ""


def synthetic_item(query: str, result: str) -> VisibleItem:
    return VisibleItem(
        label=f"{query}{RESULT_SEPARATOR}{result}",
        icon_name=CALCULATOR_ICON,
        is_synthetic=True,
        result=result,
    )


def apply_query(
    catalog: Catalog,
    query: str,
    *,
    calc_enabled: bool = True,
) -> QueryResult:
    """Filter the catalog by case-insensitive substring and pick a selection.

    A query that evaluates as arithmetic gets a synthetic result row in front
    of the name matches. The first visible row is always selected again, so the
    selection before the change plays no part.
    """
    if not query:
        items = [
            VisibleItem(label=it.name, icon_name=it.icon_name, launch_command=it.launch_command)
            for it in catalog
        ]
        return QueryResult(query=query, items=items, selection=0 if items else None)

    items: list[VisibleItem] = []
    synthetic = None
    if calc_enabled:
        result = evaluate_expression(query)
        if result is not None:
            synthetic = synthetic_item(query, result)
            items.append(synthetic)

    needle = query.lower()
    for it in catalog:
        if needle in it.name.lower():
            items.append(VisibleItem(label=it.name, icon_name=it.icon_name, launch_command=it.launch_command))

    return QueryResult(query=query, items=items, selection=0 if items else None, synthetic=synthetic)


def navigate(result: QueryResult, selection: int | None, direction: int | str) -> int | None:
    """Move the selection one row, clamped to the visible rows. Never wraps."""
    if not result.items:
        return None
    step = _step(direction)
    if selection is None or not 0 <= selection < len(result.items):
        return 0 if step else None
    return max(0, min(len(result.items) - 1, selection + step))


def _step(direction: int | str) -> int:
    if isinstance(direction, str):
        d = direction.strip().lower()
        if d in ("up", "prev", "previous"):
            return -1
        if d in ("down", "next"):
            return 1
        raise ValueError(f"unknown direction: {direction!r}")
    if direction == 0:
        return 0
    return -1 if direction < 0 else 1


def result_from_label(label: str) -> str | None:
    """Value side of a "<expr> = <value>" row label, if the label is one."""
    if RESULT_SEPARATOR not in label:
        return None
    return label.split(RESULT_SEPARATOR)[-1]


def _commit_item(catalog: Catalog, item: VisibleItem) -> CommitAction | None:
    if item.is_synthetic and item.result is not None:
        return CommitAction(kind="copy", value=item.result, label=item.label)
    cmd = catalog.command_for(item.label)
    if cmd is None:
        return None
    return CommitAction(kind="launch", value=cmd, label=item.label)


def commit_label(catalog: Catalog, label: str) -> CommitAction | None:
    """Commit a row that the caller only knows by its text."""
    value = result_from_label(label)
    if value is not None:
        return CommitAction(kind="copy", value=value, label=label)
    cmd = catalog.command_for(label)
    if cmd is None:
        return None
    return CommitAction(kind="launch", value=cmd, label=label)


def resolve_commit(
    catalog: Catalog,
    result: QueryResult,
    selection: int | None,
    *,
    calc_enabled: bool = True,
) -> CommitAction | None:
    if selection is not None and 0 <= selection < len(result.items):
        return _commit_item(catalog, result.items[selection])

    if calc_enabled and result.query:
        value = evaluate_expression(result.query)
        if value is not None:
            return CommitAction(kind="copy", value=value, label=result.query)

    if result.items:
        return _commit_item(catalog, result.items[0])
    return None
