"""
Watch-mode rebuild scheduling.

File-change notifications arrive in bursts (an editor save can touch
several files). The scheduler collapses a burst into a single pipeline
run once notifications have been quiet for the debounce window.

- stylesheet paths (.css, .scss, .sass) and the scanned-values document
  (base.json) trigger a rebuild
- at most one run is active at a time
- notifications that arrive while a run is in flight are dropped
- a failed run is logged and the scheduler keeps accepting notifications

Watching the filesystem itself is left to the caller. A rebuild regenerates
every tier from base.json; when stylesheets change, base.json has to be
refreshed first, either by an external scanner that rewrites it (which
triggers its own rebuild) or by a scan command passed to rebuild_pipeline.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_tokens.constants import SCAN_FILE, WATCHED_EXTENSIONS

if TYPE_CHECKING:
    from chuk_mcp_tokens.layers.orchestrator import LayerOrchestrator, RunResult

logger = logging.getLogger(__name__)


def is_watched(path: str | Path) -> bool:
    """Check whether a changed path should trigger a rebuild."""
    return Path(path).name == SCAN_FILE or str(path).lower().endswith(WATCHED_EXTENSIONS)


def scan_runner(command: str) -> Callable[[], None]:
    """
    Wrap an external scan command that rewrites base.json.

    The command is split shell-style and run without a shell; a non-zero
    exit raises CalledProcessError, which fails the rebuild.
    """
    argv = shlex.split(command)

    def run_scan() -> None:
        logger.info(f"Scanning: {command}")
        subprocess.run(argv, check=True)

    return run_scan


def rebuild_pipeline(
    orchestrator: LayerOrchestrator,
    scan: Callable[[], Any] | None = None,
) -> Callable[[], RunResult]:
    """
    Build the full watch-mode pipeline: optional scan, then every tier.

    Args:
        orchestrator: Orchestrator whose store holds base.json
        scan: Refreshes base.json from the stylesheets before generation

    Returns:
        A synchronous callable suitable for RebuildScheduler
    """

    def pipeline() -> RunResult:
        if scan is not None:
            scan()
        return orchestrator.run_all(force=True)

    return pipeline


class RebuildScheduler:
    """
    Debounces change notifications into serialized pipeline runs.

    The pipeline is a synchronous callable; it runs in a worker thread so
    the event loop stays responsive.

    Example:
        scheduler = RebuildScheduler(rebuild_pipeline(orchestrator))
        scheduler.notify("styles/main.scss")
        await scheduler.wait_idle()
    """

    def __init__(self, pipeline: Callable[[], Any], debounce_ms: int = 300):
        """
        Initialize the scheduler.

        Args:
            pipeline: Full rebuild to run after a burst of changes
            debounce_ms: Quiet period before a run starts
        """
        self.pipeline = pipeline
        self.debounce = debounce_ms / 1000
        self.runs = 0
        self.failures = 0
        self._pending: asyncio.TimerHandle | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    @property
    def completed(self) -> int:
        """Finished runs, successful or not."""
        return self.runs + self.failures

    def notify(self, path: str | Path) -> bool:
        """
        Report a changed file. Must be called from the event loop.

        Returns:
            True if the notification was accepted into a pending burst
        """
        if not is_watched(path):
            return False
        if self.running:
            logger.debug(f"Rebuild in progress, ignoring change to {path}")
            return False

        logger.debug(f"Change detected: {path}")
        if self._pending is not None:
            self._pending.cancel()
        loop = asyncio.get_running_loop()
        self._pending = loop.call_later(self.debounce, self._start)
        return True

    def _start(self) -> None:
        self._pending = None
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        logger.info("Rebuilding tokens")
        try:
            await asyncio.to_thread(self.pipeline)
            self.runs += 1
            logger.info("Rebuild complete")
        except Exception:
            self.failures += 1
            logger.exception("Rebuild failed")

    async def wait_idle(self) -> None:
        """Wait until no burst is pending and no run is in flight."""
        while self.pending or self.running:
            if self._task is not None and not self._task.done():
                await self._task
            else:
                await asyncio.sleep(self.debounce / 2 or 0.001)

    def cancel(self) -> None:
        """Drop a pending burst. A run already in flight is left to finish."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None


class ChangePoller:
    """
    Turns modification-time changes under a set of paths into notifications.

    Changes seen while a rebuild is in flight, or that the rebuild itself
    caused (a scan command rewriting base.json), are folded into the next
    snapshot instead of being reported.

    Example:
        poller = ChangePoller([Path("styles"), store.scan_path], scheduler)
        while True:
            await asyncio.sleep(0.5)
            poller.poll()
    """

    def __init__(self, paths: list[Path], scheduler: RebuildScheduler):
        self.paths = paths
        self.scheduler = scheduler
        self._stamps = self.snapshot()
        self._completed = scheduler.completed

    def snapshot(self) -> dict[Path, float]:
        stamps: dict[Path, float] = {}
        for root in self.paths:
            candidates = root.rglob("*") if root.is_dir() else [root]
            for path in candidates:
                if path.is_file() and is_watched(path):
                    stamps[path] = path.stat().st_mtime
        return stamps

    def poll(self) -> list[Path]:
        """
        Compare against the last snapshot and notify the scheduler.

        Must be called from the event loop.

        Returns:
            Changed paths that were accepted by the scheduler
        """
        current = self.snapshot()
        previous, self._stamps = self._stamps, current

        completed = self.scheduler.completed
        if self.scheduler.running or completed != self._completed:
            self._completed = completed
            return []

        changed = [path for path, stamp in current.items() if previous.get(path) != stamp]
        return [path for path in changed if self.scheduler.notify(path)]
