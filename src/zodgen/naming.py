"""Identifier casing for emitted schema names and object keys."""

import re
from typing import List

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z0-9])|[A-Z]?[a-z0-9]+|[A-Z]+")


def split_words(text: str) -> List[str]:
    """
    Split an identifier into words.

    Splits on any non-alphanumeric character and on case boundaries.

    Examples:
        >>> split_words("get-widget_by id")
        ['get', 'widget', 'by', 'id']
        >>> split_words("HTTPResponseCode")
        ['HTTP', 'Response', 'Code']
    """
    return _WORD_RE.findall(text or "")


def pascal(text: str) -> str:
    """
    Convert an identifier to PascalCase.

    Examples:
        >>> pascal("widget_size")
        'WidgetSize'
        >>> pascal("getWidgets")
        'GetWidgets'
    """
    return "".join(w[:1].upper() + w[1:].lower() for w in split_words(text))


def camel(text: str) -> str:
    """
    Convert an identifier to camelCase.

    Examples:
        >>> camel("created-at")
        'createdAt'
        >>> camel("UserID")
        'userId'
    """
    name = pascal(text)
    return name[:1].lower() + name[1:]


def params_name(method_name: str) -> str:
    """Name of the parameter bag of a method (``getWidgets`` -> ``GetWidgetsParams``)."""
    return f"{pascal(method_name)}Params"
