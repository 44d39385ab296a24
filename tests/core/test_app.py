# tests/core/test_app.py
import json
import logging

import pytest

from a11y_auditor.app import EXIT_CLEAN, EXIT_USAGE, EXIT_VIOLATIONS, main
from a11y_auditor.utils.configure_logging import LogWithTqdm, configure_logger


@pytest.fixture(autouse=True)
def restore_logging():
    """configure_logger touches global logger state; put it back after each test."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    for name in ("a11y_auditor.dom", "bs4"):
        logging.getLogger(name).setLevel(logging.NOTSET)


def tqdm_handlers():
    return [h for h in logging.getLogger().handlers if isinstance(h, LogWithTqdm)]


def test_configure_logger_levels():
    root = configure_logger(
        general_level="warning",
        module_specific_levels={"a11y_auditor.dom": "DEBUG"},
        silenced_loggers={"bs4": "CRITICAL"},
    )
    assert root.level == logging.WARNING
    assert logging.getLogger("a11y_auditor.dom").level == logging.DEBUG
    assert logging.getLogger("bs4").level == logging.CRITICAL


def test_configure_logger_replaces_only_its_own_handler():
    other = logging.NullHandler()
    logging.getLogger().addHandler(other)

    configure_logger("INFO")
    configure_logger("DEBUG")

    assert len(tqdm_handlers()) == 1
    assert other in logging.getLogger().handlers


def test_unknown_level_name_falls_back():
    assert configure_logger("chatty").level == logging.INFO
    assert configure_logger(logging.ERROR).level == logging.ERROR


def test_main_reports_violations(tmp_path, capsys):
    page = tmp_path / "index.html"
    page.write_text('<h1>Title</h1><h3>Sub</h3>', encoding="utf-8")
    output = tmp_path / "out" / "findings.json"

    exit_code = main([str(tmp_path), "--output", str(output), "--log-level", "ERROR"])

    assert exit_code == EXIT_VIOLATIONS
    assert len(tqdm_handlers()) == 1
    printed = capsys.readouterr().out
    assert f"{page}:1:" in printed
    assert "[heading-order]" in printed

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["summary"]["total_issues"] == 1
    assert payload["violations"][0]["data"] == {"previous": 1, "current": 3}


def test_main_clean_run_with_settings(tmp_path):
    page = tmp_path / "index.html"
    page.write_text('<h1>Title</h1><h3>Sub</h3>', encoding="utf-8")
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"a11y": {"maxSkip": 2}}), encoding="utf-8")

    assert main([str(page), "--config", str(settings)]) == EXIT_CLEAN


def test_main_rejects_invalid_settings(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"a11y": {"maxSkip": 0}}), encoding="utf-8")

    assert main([str(tmp_path), "--config", str(settings)]) == EXIT_USAGE
