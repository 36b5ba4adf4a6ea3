import io

import pytest

from bsahash.logging import configure_logging, get_logger
from bsahash.reporting import (
    PlainReporter,
    RichReporter,
    TaskStatus,
    set_reporter,
    set_verbosity,
    task,
)
from rich.console import Console


@pytest.fixture(autouse=True)
def _reset_verbosity():
    yield
    set_verbosity(0)


def test_plain_task_success_line_carries_stats():
    stream = io.StringIO()
    set_reporter(PlainReporter(stream=stream, use_color=False))
    with task("t", "one.bsa") as stats:
        stats["entries"] = 3
    line = stream.getvalue()
    assert "✔ one.bsa" in line
    assert "[entries=3]" in line


def test_plain_task_marks_failure():
    stream = io.StringIO()
    set_reporter(PlainReporter(stream=stream, use_color=False))
    with pytest.raises(ValueError):
        with task("t", "broken.bsa"):
            raise ValueError("boom")
    assert "✖ broken.bsa" in stream.getvalue()


def test_verbose_is_gated_by_verbosity():
    stream = io.StringIO()
    rep = PlainReporter(stream=stream, use_color=False)
    rep.verbose("hidden")
    set_verbosity(1)
    rep.verbose("shown")
    assert "hidden" not in stream.getvalue()
    assert "VERB1: shown" in stream.getvalue()


def test_logger_routes_to_reporter():
    stream = io.StringIO()
    set_reporter(PlainReporter(stream=stream, use_color=False))
    configure_logging(0)
    log = get_logger()
    log.info("hello")
    log.warning("careful")
    log.error("bad")
    log.debug("quiet")
    out = stream.getvalue()
    assert "INFO: hello" in out
    assert "WARN: careful" in out
    assert "ERROR: bad" in out
    assert "quiet" not in out


def test_rich_reporter_prints_progress_and_messages():
    buf = io.StringIO()
    rep = RichReporter(Console(file=buf, force_terminal=False, width=100))
    rep.start_task("all", "archives", total=2)
    rep.start_task("a", "x[1].bsa")
    rep.end_task("a", TaskStatus.SUCCESS, entries=4)
    rep.advance("all", current_item="x[1].bsa")
    rep.end_task("all", TaskStatus.SUCCESS)
    rep.error("oops [ctx]")
    out = buf.getvalue()
    assert "x[1].bsa" in out
    assert "entries=4" in out
    assert "ERROR: oops [ctx]" in out
    assert rep.progress is None
