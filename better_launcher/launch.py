from __future__ import annotations

import logging
import subprocess
import threading
from typing import Any, Callable

from better_launcher.desktop_entry import build_argv


log = logging.getLogger(__name__)

Submit = Callable[[Callable[[], None]], Any]


def submit_in_thread(job: Callable[[], None]) -> threading.Thread:
    t = threading.Thread(target=job, name="launcher-spawn", daemon=True)
    t.start()
    return t


class LaunchDispatcher:
    """Spawns desktop entry commands off the caller's thread.

    Launch is fire-and-forget: the only trace of a failed spawn is the error
    log line, the caller never sees it.
    """

    def __init__(
        self,
        *,
        new_session: bool = True,
        submit: Submit | None = None,
        popen: Callable[..., Any] | None = None,
    ) -> None:
        self._new_session = new_session
        self._submit = submit or submit_in_thread
        self._popen = popen or subprocess.Popen

    def launch(self, exec_template: str) -> None:
        argv = build_argv(exec_template)
        if not argv:
            return
        self._submit(lambda: self._spawn(argv))

    def _spawn(self, argv: list[str]) -> None:
        try:
            self._popen(
                argv,
                stdin=subprocess.DEVNULL,
                start_new_session=self._new_session,
            )
        except (OSError, ValueError) as e:
            log.error("Failed to launch application %s: %s", argv[0], e)
            return
        log.info("launched %s", " ".join(argv))
