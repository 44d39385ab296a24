import logging
from pathlib import Path
from typing import Iterable, List, Union

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIXES = (".html", ".htm", ".xhtml", ".json")
SKIPPED_DIRS = {"node_modules", ".git", "__pycache__", ".venv", "dist", "build"}


class PathUtils:
    """
    A central utility for locating the documents of an audit run.
    """

    @staticmethod
    def find_documents(
            root: Union[str, Path],
            suffixes: Iterable[str] = DOCUMENT_SUFFIXES
    ) -> List[Path]:
        """
        Returns every auditable file below ``root`` in a stable (sorted) order.
        A file path is returned as-is when its suffix matches.
        """
        root = Path(root)
        wanted = {s.lower() for s in suffixes}

        if root.is_file():
            return [root] if root.suffix.lower() in wanted else []

        if not root.is_dir():
            logger.warning("Audit root %s does not exist.", root)
            return []

        found = [
            path for path in root.rglob("*")
            if path.is_file()
            and path.suffix.lower() in wanted
            and not SKIPPED_DIRS.intersection(path.relative_to(root).parts)
        ]
        return sorted(found)
