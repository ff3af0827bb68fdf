"""Scoped temporary workspace for one installer run.

The workspace owns every downloaded and extracted file. It is removed when
the ``with`` block exits, whichever way it exits: normal completion, an
``InstallerError``, Ctrl-C, or SIGTERM/SIGHUP (converted into
``KeyboardInterrupt`` while the workspace is active).
"""

from __future__ import annotations

import logging
import shutil
import signal
import tempfile
import threading
from pathlib import Path
from types import FrameType, TracebackType
from typing import Any

logger = logging.getLogger(__name__)

_PREFIX = "assay-install-"


def _termination_signals() -> list[signal.Signals]:
    signals = [signal.SIGTERM]
    if hasattr(signal, "SIGHUP"):
        signals.append(signal.SIGHUP)
    return signals


def _raise_interrupt(signum: int, frame: FrameType | None) -> None:
    raise KeyboardInterrupt(f"terminated by signal {signal.Signals(signum).name}")


class Workspace:
    """Uniquely named temporary directory, removed on exit.

    Parameters
    ----------
    parent:
        Directory to create the workspace in. Defaults to the system
        temporary directory.
    trap_signals:
        Install handlers that turn termination signals into
        ``KeyboardInterrupt`` so cleanup still runs. Ignored off the main
        thread, where Python does not allow signal handlers.
    """

    def __init__(self, parent: Path | None = None, *, trap_signals: bool = True) -> None:
        self._parent = parent
        self._trap_signals = trap_signals
        self._path: Path | None = None
        self._previous_handlers: dict[signal.Signals, Any] = {}

    @property
    def path(self) -> Path:
        if self._path is None:
            raise RuntimeError("Workspace is not active")
        return self._path

    def file(self, name: str) -> Path:
        """Path for *name* inside the workspace.

        Raises ``ValueError`` if *name* would resolve outside it.
        """
        root = self.path.resolve()
        target = (root / name).resolve()
        if target == root or not target.is_relative_to(root):
            raise ValueError(f"{name!r} is not inside the workspace")
        return target

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> Workspace:
        if self._parent is not None:
            self._parent.mkdir(parents=True, exist_ok=True)
        self._path = Path(tempfile.mkdtemp(prefix=_PREFIX, dir=self._parent))
        logger.debug("Created workspace %s", self._path)
        try:
            self._install_handlers()
        except BaseException:
            self._remove()
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self._restore_handlers()
        finally:
            self._remove()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _remove(self) -> None:
        if self._path is None:
            return
        path, self._path = self._path, None
        try:
            shutil.rmtree(path)
        except OSError as exc:
            logger.warning("Could not remove workspace %s: %s", path, exc)
        else:
            logger.debug("Removed workspace %s", path)

    def _install_handlers(self) -> None:
        if not self._trap_signals or threading.current_thread() is not threading.main_thread():
            return
        for signum in _termination_signals():
            self._previous_handlers[signum] = signal.signal(signum, _raise_interrupt)

    def _restore_handlers(self) -> None:
        while self._previous_handlers:
            signum, handler = self._previous_handlers.popitem()
            signal.signal(signum, handler)
