"""Module rendering: a complete zod source file from a generation result."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader

from zodgen.config.settings import get_settings
from zodgen.schema.pipeline import GenerationResult
from zodgen.schema.synthesizer import SchemaDefinition
from .zod import ZodRenderer

MODULE_TEMPLATE = "schemas.ts.j2"


def _template_directory() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")


@dataclass
class Declaration:
    """Rendered ``export const`` declaration."""

    identifier: str
    source: str


class TemplateRenderer:
    """Jinja2 environment over the bundled templates."""

    def __init__(self, template_dir: str | None = None):
        self.template_dir = template_dir or _template_directory()
        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            newline_sequence="\n",
            autoescape=False,
        )

    def render_template(self, template_name: str, **kwargs) -> str:
        template = self.env.get_template(template_name)
        return template.render(**kwargs)


def _declarations(definitions: List[SchemaDefinition], renderer: ZodRenderer) -> List[Declaration]:
    return [
        Declaration(identifier=renderer.identifier(d.name), source=renderer.render(d.expr))
        for d in definitions
    ]


def render_module(
    result: GenerationResult,
    title: str = "service",
    schema_suffix: Optional[str] = None,
    zod_module: Optional[str] = None,
) -> str:
    """
    Render a generation result as a TypeScript module of zod schemas.

    Ordered definitions come first, circular definitions after them.

    Args:
        result: Output of generate_schemas()
        title: Service title for the file header
        schema_suffix: Suffix of exported identifiers (defaults to settings)
        zod_module: Module the ``z`` namespace is imported from (defaults to settings)

    Returns:
        Module source text
    """
    settings = get_settings()
    renderer = ZodRenderer(schema_suffix=schema_suffix or settings.schema_suffix)
    return TemplateRenderer().render_template(
        MODULE_TEMPLATE,
        title=title,
        zod_module=zod_module or settings.zod_module,
        definitions=_declarations(result.definitions, renderer),
        circular=_declarations(result.circular_definitions, renderer),
    )


def write_module(content: str, output_path: Path) -> None:
    """Write rendered module source, creating parent directories."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
