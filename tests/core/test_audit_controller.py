# tests/core/test_audit_controller.py
import json
import logging

import pytest

from a11y_auditor.config import AnalysisConfig
from a11y_auditor.controllers.audit_controller import AuditController
from a11y_auditor.utils.path_utils import PathUtils


@pytest.fixture
def project(tmp_path, jsx):
    """A small project tree: one clean page, one broken page, one broken AST, noise in node_modules."""
    (tmp_path / "pages").mkdir()
    (tmp_path / "pages" / "ok.html").write_text(
        '<h1>Title</h1><label for="q">Q</label><input id="q">', encoding="utf-8"
    )
    (tmp_path / "pages" / "broken.htm").write_text(
        '<h1>Title</h1><h4>Deep</h4><input aria-labelledby="ghost">', encoding="utf-8"
    )
    (tmp_path / "App.json").write_text(
        json.dumps(jsx.program(jsx.el("h2"), jsx.el("h5"))), encoding="utf-8"
    )
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "vendor.html").write_text("<h1></h1><h6></h6>", encoding="utf-8")
    (tmp_path / "README.md").write_text("# docs", encoding="utf-8")
    return tmp_path


def test_find_documents(project):
    found = PathUtils.find_documents(project)
    assert [p.relative_to(project).as_posix() for p in found] == [
        "App.json", "pages/broken.htm", "pages/ok.html"
    ]
    assert PathUtils.find_documents(project / "App.json") == [project / "App.json"]
    assert PathUtils.find_documents(project / "README.md") == []
    assert PathUtils.find_documents(project / "missing") == []


def test_audit_directory(project):
    controller = AuditController()
    progress = []
    summary = controller.audit_directory(
        project, workers=1, progress_callback=lambda done, total: progress.append((done, total))
    )

    assert summary["total_files"] == 3
    assert summary["files_with_issues"] == 2
    assert summary["errors"] == 0
    assert summary["stats"] == {
        "heading-order": {"skippedLevel": 2},
        "aria-reference": {"missingReference": 1},
    }
    assert summary["total_issues"] == 3
    assert progress[-1] == (3, 3)

    sources = {r["source"] for r in controller.get_results_for_export()}
    assert sources == {str(project / "App.json"), str(project / "pages" / "broken.htm")}


def test_config_is_passed_to_workers(project):
    controller = AuditController(AnalysisConfig(maxSkip=3, disabledRules=["form-label"]))
    summary = controller.audit_directory(project, workers=1)
    assert summary["stats"] == {"aria-reference": {"missingReference": 1}}


def test_unreadable_documents_are_reported_as_errors(tmp_path, caplog):
    bad = tmp_path / "bad.json"
    bad.write_text("{oops", encoding="utf-8")
    other = tmp_path / "notes.txt"
    other.write_text("x", encoding="utf-8")

    controller = AuditController()
    with caplog.at_level(logging.ERROR):
        summary = controller.run_audit([bad, other], workers=1, show_progress=True)

    assert summary["errors"] == 2
    assert summary["total_issues"] == 0
    assert {e["path"] for e in controller.get_errors()} == {str(bad), str(other)}
    assert "Worker failed" in caplog.text
