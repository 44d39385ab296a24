"""
a11y-auditor - command line entry point.

Audits HTML files and serialized JSX / Vue ASTs below one or more paths and
optionally writes the findings to a JSON report.
"""

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from a11y_auditor.config import ConfigurationError, load_config
from a11y_auditor.controllers.audit_controller import AuditController
from a11y_auditor.utils.configure_logging import configure_logger
from a11y_auditor.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

# Third-party loggers that are too chatty at DEBUG
SILENCED_LOGGERS = {"bs4": "WARNING"}

EXIT_CLEAN = 0
EXIT_VIOLATIONS = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="a11y-audit", description="Static accessibility audit")
    parser.add_argument("paths", nargs="+", help="Files or directories to audit")
    parser.add_argument("--config", type=str, default=None, help="JSON settings file")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes")
    parser.add_argument("--output", type=str, default=None, help="Write the findings to this JSON file")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Root log level")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logger(args.log_level, silenced_loggers=SILENCED_LOGGERS)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        logger.error(str(e))
        return EXIT_USAGE

    documents = []
    for path in args.paths:
        documents.extend(PathUtils.find_documents(path))

    controller = AuditController(config)
    summary = controller.run_audit(documents, workers=args.workers, show_progress=args.progress)

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            json.dump({
                "summary": summary,
                "violations": controller.get_results_for_export(),
                "errors": controller.get_errors()
            }, f, indent=2)
        logger.info(f"Findings written to {output}")

    for record in controller.get_results_for_export():
        position = record["position"]
        print(f"{record['source']}:{position['line']}:{position['column']}: "
              f"{record['message']} [{record['rule_id']}]")

    print(f"{summary['total_issues']} issue(s) in {summary['files_with_issues']} of "
          f"{summary['total_files']} file(s), {summary['errors']} error(s)")

    return EXIT_VIOLATIONS if summary["total_issues"] or summary["errors"] else EXIT_CLEAN


if __name__ == "__main__":
    raise SystemExit(main())
