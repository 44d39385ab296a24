# src/a11y_auditor/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, List, Optional, Set

from .core import CheckDefinition, DialectAdapter, DialectDefinition

logger = logging.getLogger(__name__)


class DOMRegistry:
    """
    Central registry for source dialects and document checks.

    Dynamically discovers DialectDefinition modules from the
    'a11y_auditor.dom.dialects' package and CheckDefinition modules from the
    'a11y_auditor.dom.checks' package.
    """

    _dialects: List[DialectDefinition] = []
    _checks: Dict[str, CheckDefinition] = {}
    _all_codes: Set[str] = set()
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Registers every definition found in the dialects and checks packages.

        Each module is expected to expose a `DEFINITION` attribute. Modules that
        fail to import are logged and skipped so one broken check cannot take
        the rest down.
        """
        if cls._loaded:
            return

        try:
            import a11y_auditor.dom.dialects as dialects_pkg
            import a11y_auditor.dom.checks as checks_pkg
        except ImportError as e:
            logger.error(f"Could not find definition packages: {e}")
            return

        for module in cls._iter_modules(dialects_pkg):
            defn = getattr(module, "DEFINITION", None)
            if isinstance(defn, DialectDefinition):
                cls._dialects.append(defn)
                logger.debug(f"Dialect loaded: {defn.name}")

        for module in cls._iter_modules(checks_pkg):
            defn = getattr(module, "DEFINITION", None)
            if isinstance(defn, CheckDefinition):
                cls.register_check(defn)

        cls._dialects.sort(key=lambda d: d.priority)
        cls._loaded = True

    @staticmethod
    def _iter_modules(package):
        for _, name, _ in pkgutil.iter_modules(package.__path__):
            full_name = f"{package.__name__}.{name}"
            try:
                yield importlib.import_module(full_name)
            except Exception as e:
                logger.error(f"Error loading module {full_name}: {e}")

    @classmethod
    def register_check(cls, defn: CheckDefinition) -> None:
        """Registers (or replaces) a check under its rule id."""
        cls._checks[defn.rule_id] = defn
        cls._all_codes.update(f"{defn.rule_id}/{code}" for code in defn.codes)
        logger.debug(f"Check loaded: {defn.rule_id}")

    @classmethod
    def get_adapters(cls) -> List[DialectAdapter]:
        """Returns dialect adapters ordered by priority."""
        cls.discover()
        return [d.adapter for d in cls._dialects]

    @classmethod
    def get_adapter(cls, name: str) -> Optional[DialectAdapter]:
        cls.discover()
        for defn in cls._dialects:
            if defn.name == name:
                return defn.adapter
        return None

    @classmethod
    def get_check(cls, rule_id: str) -> Optional[CheckDefinition]:
        cls.discover()
        return cls._checks.get(rule_id)

    @classmethod
    def get_all_checks(cls) -> List[CheckDefinition]:
        """Returns all registered checks in execution order."""
        cls.discover()
        return sorted(cls._checks.values(), key=lambda c: (c.order, c.rule_id))

    @classmethod
    def get_all_possible_codes(cls) -> List[str]:
        """
        Returns every 'rule/messageKey' pair registered in the system.
        Used by hosts to build severity tables and message catalogs.
        """
        cls.discover()
        return sorted(cls._all_codes)
