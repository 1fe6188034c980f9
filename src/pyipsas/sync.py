"""Periodic auto-save coordination.

A :class:`PeriodicSyncCoordinator` fires a tick every ``interval_ms``
milliseconds on the running asyncio loop.  Each tick captures the current
form state and hands it to a submit function, unless a previous submission
is still in flight (the tick is then dropped, not queued) or there is no
note being edited (silent no-op).

Failures are reported through ``on_failure`` as :class:`SyncFailure` and
never stop the timer; the next tick is the retry.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pyipsas.exceptions import SyncFailure
from pyipsas.models.sync import SyncTarget

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Explicit outcome for synchronous submit functions.

    Returning ``None`` (or anything that is not a ``SyncResult`` or an
    awaitable) counts as success; raising counts as failure.
    """

    ok: bool
    error: BaseException | None = None

    @classmethod
    def success(cls) -> SyncResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, error: BaseException | str) -> SyncResult:
        if isinstance(error, str):
            error = RuntimeError(error)
        return cls(ok=False, error=error)


FormSnapshot = Mapping[str, Any]
CaptureFn = Callable[[], FormSnapshot]
SubmitFn = Callable[[SyncTarget, FormSnapshot], SyncResult | Awaitable[Any] | None]
TargetSource = SyncTarget | Callable[[], SyncTarget | None] | None


@dataclass(slots=True)
class SyncState:
    """Transient per-run bookkeeping.  Lives from ``start`` to ``stop``."""

    in_flight: bool = False
    ticks: int = 0
    submissions: int = 0
    skipped_in_flight: int = 0
    skipped_no_target: int = 0
    failures: int = 0
    last_error: SyncFailure | None = None


@dataclass(eq=False, slots=True)
class SyncHandle:
    """Returned by :meth:`PeriodicSyncCoordinator.start`; pass it to ``stop``."""

    task: asyncio.Task[None]
    interval_ms: int
    state: SyncState = field(default_factory=SyncState)
    cancelled: bool = False

    @property
    def stopped(self) -> bool:
        return self.cancelled or self.task.done()


class PeriodicSyncCoordinator:
    """Save form state on a fixed interval without overlapping saves.

    Usage::

        coordinator = PeriodicSyncCoordinator(on_failure=report)
        handle = coordinator.start(30_000, collect_form_data, save, target)
        ...
        coordinator.set_target(other_note)
        ...
        coordinator.stop(handle)

    Parameters
    ----------
    on_success : callable, optional
        Called with the target after each successful submission.
    on_failure : callable, optional
        Called with a :class:`SyncFailure` for each failed tick.
    """

    def __init__(
        self,
        *,
        on_success: Callable[[SyncTarget], None] | None = None,
        on_failure: Callable[[SyncFailure], None] | None = None,
    ) -> None:
        self._on_success = on_success
        self._on_failure = on_failure
        self._handle: SyncHandle | None = None
        self._capture_fn: CaptureFn | None = None
        self._submit_fn: SubmitFn | None = None
        self._target: TargetSource = None
        self._pending: set[asyncio.Future[Any]] = set()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._handle is not None and not self._handle.stopped

    @property
    def state(self) -> SyncState | None:
        """State of the current run, or ``None`` when not started."""
        return self._handle.state if self._handle is not None else None

    @property
    def in_flight(self) -> bool:
        # Saves dispatched before a stop/start cycle still count.
        return bool(self._pending) or (self.state is not None and self.state.in_flight)

    def start(
        self,
        interval_ms: int,
        capture_fn: CaptureFn,
        submit_fn: SubmitFn,
        target: TargetSource = None,
    ) -> SyncHandle:
        """Begin ticking every *interval_ms* milliseconds.

        *target* may be a :class:`SyncTarget`, ``None`` or a zero-argument
        callable returning either; it is resolved on every tick.

        Raises
        ------
        ValueError
            If *interval_ms* is not a positive integer.
        RuntimeError
            If the coordinator is already running, or no event loop runs.
        """
        if isinstance(interval_ms, bool) or not isinstance(interval_ms, int) or interval_ms <= 0:
            raise ValueError(f"interval_ms must be a positive integer, got {interval_ms!r}")
        if self.running:
            raise RuntimeError("Coordinator already started; stop it first")

        loop = asyncio.get_running_loop()
        self._capture_fn = capture_fn
        self._submit_fn = submit_fn
        self._target = target

        task = loop.create_task(self._run(interval_ms / 1000.0), name="pyipsas-auto-save")
        self._handle = SyncHandle(task=task, interval_ms=interval_ms)
        _logger.debug("Auto-save started interval_ms=%d", interval_ms)
        return self._handle

    def stop(self, handle: SyncHandle | None = None) -> None:
        """Cancel future ticks.

        Idempotent.  ``None``, a stale handle, or a coordinator that was
        never started are all no-ops.  A submission already dispatched is
        left to complete.
        """
        if handle is None:
            handle = self._handle
        if handle is None or handle.stopped:
            return
        handle.cancelled = True
        handle.task.cancel()
        if handle is self._handle:
            self._handle = None
        _logger.debug("Auto-save stopped")

    def set_target(self, target: TargetSource) -> None:
        """Point subsequent ticks at another note (or ``None`` to pause)."""
        self._target = target

    def current_target(self) -> SyncTarget | None:
        target = self._target
        if target is None or isinstance(target, SyncTarget):
            return target
        return target()

    async def _run(self, interval_s: float) -> None:
        while True:
            await asyncio.sleep(interval_s)
            self.tick()

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Run one auto-save cycle.  Never raises.

        Does nothing unless the coordinator is running.
        """
        if not self.running:
            return
        state = self.state
        capture_fn = self._capture_fn
        submit_fn = self._submit_fn
        assert state is not None and capture_fn is not None and submit_fn is not None  # noqa: S101
        state.ticks += 1

        if self.in_flight:
            state.skipped_in_flight += 1
            _logger.debug("Auto-save tick dropped: previous save still in flight")
            return

        try:
            target = self.current_target()
        except Exception as exc:
            self._report_failure(state, None, exc, "resolving the current note failed")
            return
        if target is None:
            state.skipped_no_target += 1
            return

        try:
            snapshot: FormSnapshot = MappingProxyType(dict(capture_fn()))
        except Exception as exc:
            self._report_failure(state, target, exc, "capturing form data failed")
            return

        # Flag must be set before submit_fn can suspend.
        state.in_flight = True
        state.submissions += 1
        try:
            outcome = submit_fn(target, snapshot)
        except Exception as exc:
            state.in_flight = False
            self._report_failure(state, target, exc, "save failed")
            return

        if inspect.isawaitable(outcome):
            try:
                future = asyncio.ensure_future(outcome)
            except Exception as exc:
                state.in_flight = False
                if inspect.iscoroutine(outcome):
                    outcome.close()
                self._report_failure(state, target, exc, "scheduling the save failed")
                return
            self._pending.add(future)
            future.add_done_callback(lambda f: self._on_submit_done(state, target, f))
            return

        state.in_flight = False
        self._settle(state, target, outcome)

    def _on_submit_done(self, state: SyncState, target: SyncTarget, future: asyncio.Future[Any]) -> None:
        self._pending.discard(future)
        state.in_flight = False
        if future.cancelled():
            self._report_failure(state, target, asyncio.CancelledError(), "save cancelled")
            return
        exc = future.exception()
        if exc is not None:
            self._report_failure(state, target, exc, "save failed")
            return
        self._settle(state, target, future.result())

    def _settle(self, state: SyncState, target: SyncTarget, outcome: Any) -> None:
        if isinstance(outcome, SyncResult) and not outcome.ok:
            error = outcome.error if outcome.error is not None else RuntimeError("save reported failure")
            self._report_failure(state, target, error, "save failed")
            return
        _logger.debug("Auto-saved note=%s", target.note_id)
        if self._on_success is not None:
            try:
                self._on_success(target)
            except Exception:
                _logger.warning("on_success callback failed", exc_info=True)

    def _report_failure(
        self,
        state: SyncState,
        target: SyncTarget | None,
        error: BaseException,
        reason: str,
    ) -> None:
        failure = SyncFailure(f"Auto-save {reason}: {error!r}", target=target)
        failure.__cause__ = error
        state.failures += 1
        state.last_error = failure
        _logger.warning("%s", failure)
        if self._on_failure is not None:
            try:
                self._on_failure(failure)
            except Exception:
                _logger.warning("on_failure callback failed", exc_info=True)

    async def aclose(self) -> None:
        """Stop ticking and wait for an in-flight save to settle."""
        self.stop()
        pending = list(self._pending)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
