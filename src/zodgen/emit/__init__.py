"""Emission of generated schemas as zod source."""

from .zod import ZodRenderer, js_literal, regex_literal
from .module import TemplateRenderer, render_module, write_module

__all__ = [
    "ZodRenderer",
    "js_literal",
    "regex_literal",
    "TemplateRenderer",
    "render_module",
    "write_module",
]
