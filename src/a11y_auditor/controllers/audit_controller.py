import logging
from collections import Counter, defaultdict
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from pathlib import Path
from typing import List, Dict, Any, Iterable, Optional, Union

from tqdm import tqdm

from a11y_auditor.config import AnalysisConfig
from a11y_auditor.dom.builder import load_document
from a11y_auditor.dom.qngine import QNGINE
from a11y_auditor.managers.report_manager import ReportManager
from a11y_auditor.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


def _worker_audit_document(path: str, config: AnalysisConfig) -> Dict[str, Any]:
    """
    Worker function to audit a single document in a separate process.
    Each worker builds its own tree and index; nothing is shared between documents.
    """
    try:
        document = load_document(path)
        violations = QNGINE(config).run_audit(document)

        report = ReportManager(source=path)
        report.collect(violations)
        return {
            "path": path,
            "records": report.to_records(),
            "stats": report.summary()
        }
    except Exception as e:
        logger.error(f"Worker failed on {path}: {e}")
        return {"error": str(e), "path": path}


class AuditController:
    """
    Orchestrates auditing a set of files, managing parallel execution and the
    aggregation of results.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()

        # Results Buffers
        self.records: List[Dict[str, Any]] = []
        self.errors: List[Dict[str, str]] = []
        self.stats = defaultdict(Counter)

    def run_audit(
            self,
            paths: Iterable[Union[str, Path]],
            workers: int = 4,
            show_progress: bool = False,
            progress_callback=None
    ) -> Dict[str, Any]:
        """Audits every path and aggregates the findings."""
        tasks = [str(p) for p in paths]
        total = len(tasks)

        # Reset Buffers
        self.records = []
        self.errors = []
        self.stats = defaultdict(Counter)

        func = partial(_worker_audit_document, config=self.config)

        if workers <= 1:
            results_iter = map(func, tasks)
            self._aggregate_all(results_iter, total, show_progress, progress_callback)
        else:
            with ProcessPoolExecutor(max_workers=workers) as executor:
                results_iter = executor.map(func, tasks)
                self._aggregate_all(results_iter, total, show_progress, progress_callback)

        files_with_issues = len({r["source"] for r in self.records})
        logger.info(f"Audited {total} file(s): {len(self.records)} violation(s), {len(self.errors)} error(s)")

        return {
            "total_files": total,
            "files_with_issues": files_with_issues,
            "total_issues": len(self.records),
            "errors": len(self.errors),
            "stats": {rule: dict(keys) for rule, keys in self.stats.items()}
        }

    def audit_directory(self, root: Union[str, Path], **kwargs) -> Dict[str, Any]:
        """Audits every HTML / serialized-AST file below ``root``."""
        paths = PathUtils.find_documents(root)
        if not paths:
            logger.warning(f"No documents found under {root}")
        return self.run_audit(paths, **kwargs)

    def _aggregate_all(self, results_iter, total, show_progress, progress_callback):
        if show_progress:
            results_iter = tqdm(results_iter, total=total, desc="Auditing", unit="file")

        for i, result in enumerate(results_iter):
            if progress_callback:
                progress_callback(i + 1, total)

            if "error" in result:
                self.errors.append(result)
                continue

            self.records.extend(result["records"])
            for rule, keys in result["stats"].items():
                for key, count in keys.items():
                    self.stats[rule][key] += count

    # --- Result Getters ---
    def get_results_for_export(self) -> List[Dict[str, Any]]:
        return self.records

    def get_errors(self) -> List[Dict[str, str]]:
        return self.errors
