from __future__ import annotations

import logging
from dataclasses import dataclass, field

from better_launcher.catalog import Catalog
from better_launcher.launch import LaunchDispatcher
from better_launcher.query import CommitAction, QueryResult, apply_query, navigate, resolve_commit


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderState:
    items: list[tuple[str, str | None]] = field(default_factory=list)
    selection: int | None = None


class LauncherSession:
    """State owned by the UI loop: the catalog, the current query and selection.

    The presentation layer forwards query edits, arrow keys and enter here and
    draws whatever render() returns. Clipboard and closing the window stay on
    its side; on_commit only says what was committed.
    """

    def __init__(self, catalog: Catalog, dispatcher: LaunchDispatcher, *, calc_enabled: bool = True) -> None:
        self._catalog = catalog
        self._dispatcher = dispatcher
        self._calc_enabled = calc_enabled
        self._result = apply_query(catalog, "", calc_enabled=calc_enabled)
        self._selection = self._result.selection

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def result(self) -> QueryResult:
        return self._result

    @property
    def selection(self) -> int | None:
        return self._selection

    def render(self) -> RenderState:
        return RenderState(
            items=[(it.label, it.icon_name) for it in self._result.items],
            selection=self._selection,
        )

    def on_query_changed(self, text: str) -> RenderState:
        self._result = apply_query(self._catalog, text, calc_enabled=self._calc_enabled)
        self._selection = self._result.selection
        return self.render()

    def on_navigate(self, direction: int | str) -> RenderState:
        self._selection = navigate(self._result, self._selection, direction)
        return self.render()

    def on_commit(self, selected_index: int | None = None) -> CommitAction | None:
        index = self._selection if selected_index is None else selected_index
        action = resolve_commit(self._catalog, self._result, index, calc_enabled=self._calc_enabled)
        if action is None:
            log.debug("commit with nothing to do (query=%r)", self._result.query)
            return None
        if action.kind == "launch":
            self._dispatcher.launch(action.value)
        return action
