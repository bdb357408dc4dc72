"""
pytest plugin recording a story outcome for every test.

Enable it with ``-p annalist.pytest_plugin --annalist-dir DIR`` (or list it in
``pytest_plugins``); without ``--annalist-dir`` it does nothing.
"""

from pathlib import Path

import pytest

from annalist.recorder import OutcomeRecorder
from annalist.reporting.models import OutcomeResult


def pytest_addoption(parser):
    """Add custom command line options."""
    group = parser.getgroup("annalist")
    group.addoption("--annalist-dir", action="store", default=None,
                    help="Directory to write story outcome files to")


def pytest_configure(config):
    directory = config.getoption("--annalist-dir")
    if directory:
        config.pluginmanager.register(
            OutcomeRecorderPlugin(Path(directory).resolve()), "annalist-recorder"
        )


def _result_for(report) -> OutcomeResult:
    if report.passed:
        return OutcomeResult.SUCCESS
    if report.skipped:
        return OutcomeResult.SKIPPED
    if report.when == "call":
        return OutcomeResult.FAILURE
    return OutcomeResult.ERROR


class OutcomeRecorderPlugin:
    """Records the outcome of each test once its result is known."""

    def __init__(self, directory: Path):
        self.recorder = OutcomeRecorder(directory)

    @pytest.hookimpl(hookwrapper=True)
    def pytest_runtest_makereport(self, item, call):
        outcome = yield
        report = outcome.get_result()
        # The call phase decides the result unless setup already failed or skipped.
        if report.when == "call" or (report.when == "setup" and not report.passed):
            test_type = getattr(item, "cls", None) or getattr(item, "module", None)
            failure_message = str(report.longrepr) if report.failed else None
            self.recorder.record(
                test_type,
                item.name,
                _result_for(report),
                duration=report.duration,
                failure_message=failure_message,
            )
