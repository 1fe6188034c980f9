"""Run the backend's built-in test suites remotely.

The backend ships its own test entry points (architecture checks,
attachment handling).  This module invokes them one by one through the
RPC transport and collects a pass/fail summary; a failing suite never
prevents the remaining ones from running.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from pyipsas.exceptions import IpsasError

_logger = logging.getLogger(__name__)

_BANNER = "=" * 80


@dataclass(frozen=True, slots=True)
class RemoteSuite:
    name: str
    function_name: str


DEFAULT_SUITES: tuple[RemoteSuite, ...] = (
    RemoteSuite("Architecture test suite", "runArchitectureTests"),
    RemoteSuite("Attachment test suite", "runAllAttachmentTests"),
)


@dataclass(frozen=True, slots=True)
class SuiteResult:
    suite: RemoteSuite
    passed: bool
    result: Any = None
    error: str | None = None


@dataclass(slots=True)
class SuiteRunSummary:
    results: list[SuiteResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def ok(self) -> bool:
        return self.failed == 0


class FunctionRunner(Protocol):
    async def run_function(self, function: str, *parameters: Any) -> Any:
        ...


def _suite_passed(result: Any) -> bool:
    """Interpret a suite's return value.

    Suites that return nothing are treated as passing; a mapping with a
    ``success``/``passed`` flag or a bare boolean is honoured.
    """
    if isinstance(result, bool):
        return result
    if isinstance(result, dict):
        for key in ("success", "passed", "ok"):
            if key in result:
                return bool(result[key])
        failed = result.get("failed")
        if isinstance(failed, int):
            return failed == 0
    return True


async def run_remote_suites(
    runner: FunctionRunner,
    suites: Iterable[RemoteSuite] = DEFAULT_SUITES,
) -> SuiteRunSummary:
    """Run each suite in order and return the summary."""
    summary = SuiteRunSummary()
    for suite in suites:
        _logger.info(_BANNER)
        _logger.info("Running %s (%s)", suite.name, suite.function_name)
        _logger.info(_BANNER)
        try:
            result = await runner.run_function(suite.function_name)
        except IpsasError as exc:
            _logger.error("%s failed: %s", suite.name, exc)
            summary.results.append(SuiteResult(suite=suite, passed=False, error=str(exc)))
            continue

        passed = _suite_passed(result)
        if passed:
            _logger.info("%s completed successfully", suite.name)
        else:
            _logger.error("%s failed. Check output above for details.", suite.name)
        summary.results.append(SuiteResult(suite=suite, passed=passed, result=result))

    _logger.info("Test run complete")
    _logger.info("Total: %d, Passed: %d, Failed: %d", summary.total, summary.passed, summary.failed)
    return summary
