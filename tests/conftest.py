# tests/conftest.py
import pytest

from a11y_auditor.config import AnalysisConfig


def _loc(line, column=0):
    return {"start": {"line": line, "column": column}, "end": {"line": line, "column": column + 1}}


class JSXFactory:
    """Builds ESTree JSX dictionaries the way a JS parser would serialize them."""

    def __init__(self):
        self._line = 0

    def _next_line(self):
        self._line += 1
        return self._line

    @staticmethod
    def name(name):
        if ":" in name:
            namespace, local = name.split(":", 1)
            return {
                "type": "JSXNamespacedName",
                "namespace": {"type": "JSXIdentifier", "name": namespace},
                "name": {"type": "JSXIdentifier", "name": local},
            }
        parts = name.split(".")
        node = {"type": "JSXIdentifier", "name": parts[0]}
        for part in parts[1:]:
            node = {
                "type": "JSXMemberExpression",
                "object": node,
                "property": {"type": "JSXIdentifier", "name": part},
            }
        return node

    def attr(self, name, value):
        """value: str -> literal, None -> boolean attribute."""
        return {
            "type": "JSXAttribute",
            "name": self.name(name),
            "value": None if value is None else {"type": "Literal", "value": value},
        }

    def expr_attr(self, name, expression=None):
        """Attribute bound to an expression; an identifier by default."""
        expression = expression or {"type": "Identifier", "name": "someValue"}
        return {
            "type": "JSXAttribute",
            "name": self.name(name),
            "value": {"type": "JSXExpressionContainer", "expression": expression},
        }

    @staticmethod
    def spread(argument="props"):
        return {"type": "JSXSpreadAttribute", "argument": {"type": "Identifier", "name": argument}}

    def el(self, name, *attributes, children=(), line=None, **props):
        """
        JSX element. Keyword props become string literal attributes
        (``html_for`` style names are not translated; pass attr() for those).
        """
        line = line or self._next_line()
        attrs = list(attributes) + [self.attr(k, v) for k, v in props.items()]
        return {
            "type": "JSXElement",
            "openingElement": {
                "type": "JSXOpeningElement",
                "name": self.name(name),
                "attributes": attrs,
                "selfClosing": not children,
            },
            "children": list(children),
            "loc": _loc(line),
        }

    def fragment(self, *children):
        return {"type": "JSXFragment", "children": list(children), "loc": _loc(self._next_line())}

    @staticmethod
    def text(value):
        return {"type": "JSXText", "value": value}

    @staticmethod
    def container(expression):
        return {"type": "JSXExpressionContainer", "expression": expression}

    @staticmethod
    def program(*expressions):
        """Wraps JSX in `export default () => (...)` style statements."""
        return {
            "type": "Program",
            "body": [
                {"type": "ExpressionStatement", "expression": expr}
                for expr in expressions
            ],
        }


class VueFactory:
    """Builds vue-eslint-parser VElement dictionaries."""

    def __init__(self):
        self._line = 0

    def el(self, name, *attributes, children=(), **props):
        self._line += 1
        attrs = list(attributes) + [self.attr(k, v) for k, v in props.items()]
        return {
            "type": "VElement",
            "name": name.lower(),
            "rawName": name,
            "startTag": {"type": "VStartTag", "attributes": attrs},
            "children": list(children),
            "loc": _loc(self._line),
        }

    @staticmethod
    def attr(name, value):
        return {
            "type": "VAttribute",
            "directive": False,
            "key": {"type": "VIdentifier", "name": name.lower(), "rawName": name},
            "value": None if value is None else {"type": "VLiteral", "value": value},
        }

    @staticmethod
    def bind(name=None, expression=None, dynamic_argument=False):
        """`:name="expr"`; no name gives `v-bind="expr"`."""
        if dynamic_argument:
            argument = {"type": "VExpressionContainer", "expression": {"type": "Identifier", "name": "key"}}
        elif name is None:
            argument = None
        else:
            argument = {"type": "VIdentifier", "name": name, "rawName": name}
        return {
            "type": "VAttribute",
            "directive": True,
            "key": {
                "type": "VDirectiveKey",
                "name": {"type": "VIdentifier", "name": "bind", "rawName": ":"},
                "argument": argument,
                "modifiers": [],
            },
            "value": {
                "type": "VExpressionContainer",
                "expression": expression or {"type": "Identifier", "name": "someValue"},
            },
        }

    @staticmethod
    def on(event):
        return {
            "type": "VAttribute",
            "directive": True,
            "key": {
                "type": "VDirectiveKey",
                "name": {"type": "VIdentifier", "name": "on", "rawName": "@"},
                "argument": {"type": "VIdentifier", "name": event},
                "modifiers": [],
            },
            "value": {"type": "VExpressionContainer", "expression": {"type": "Identifier", "name": "handler"}},
        }

    @staticmethod
    def text(value):
        return {"type": "VText", "value": value}

    @staticmethod
    def program(template):
        return {"type": "Program", "body": [], "templateBody": template}


@pytest.fixture
def jsx():
    """A fresh JSX node factory; element lines increase in creation order."""
    return JSXFactory()


@pytest.fixture
def vue():
    return VueFactory()


@pytest.fixture
def default_config():
    return AnalysisConfig()
