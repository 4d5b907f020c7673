"""Rendering of schema expressions as TypeScript zod source."""

import json
import re
from typing import Any, List
from zodgen.schema.expression import KeyCountCheck, KeyPatternCheck, Op, SchemaExpr

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Characters that cannot appear raw inside a single-quoted JavaScript string
_STRING_ESCAPES = str.maketrans({
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
})

INDENT = "  "

# Chained operations rendered as `.name(arg, ...)`
_SIMPLE_OPS = frozenset({
    "int",
    "length",
    "min",
    "max",
    "nonempty",
    "gt",
    "gte",
    "lt",
    "lte",
    "positive",
    "nonnegative",
    "negative",
    "nonpositive",
    "multipleOf",
    "array",
    "default",
    "optional",
})


def js_literal(value: Any) -> str:
    """
    Render a JSON-compatible Python value as a JavaScript literal.

    Examples:
        >>> js_literal(3.0)
        '3'
        >>> js_literal([True, None])
        '[true, null]'
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, str):
        return "'" + value.translate(_STRING_ESCAPES) + "'"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(js_literal(v) for v in value) + "]"
    if isinstance(value, dict):
        items = ", ".join(f"{object_key(str(k))}: {js_literal(v)}" for k, v in value.items())
        return "{ " + items + " }" if items else "{}"
    return json.dumps(value)


def object_key(key: str) -> str:
    """Quote an object key unless it is a valid identifier."""
    return key if _IDENTIFIER_RE.match(key) else js_literal(key)


def regex_literal(pattern: str) -> str:
    """
    Render a pattern as a JavaScript regular expression literal.

    Slashes are escaped unless a backslash already escapes them; an escaped
    backslash (``\\\\``) does not escape the character after it.
    """
    out: List[str] = []
    escaped = False
    for ch in pattern:
        if escaped:
            out.append(ch)
            escaped = False
        elif ch == "\\":
            out.append(ch)
            escaped = True
        elif ch == "/":
            out.append("\\/")
        else:
            out.append(ch)
    return "/" + "".join(out) + "/"


class ZodRenderer:
    """Renders SchemaExpr values as zod expressions."""

    def __init__(self, schema_suffix: str = "Schema", z: str = "z"):
        self.schema_suffix = schema_suffix
        self.z = z

    def identifier(self, name: str) -> str:
        return f"{name}{self.schema_suffix}"

    def render(self, expr: SchemaExpr, indent: int = 0) -> str:
        """Render an expression; nested blocks are indented ``indent`` levels."""
        source = self._render_constructor(expr.constructor, indent)
        for op in expr.chain:
            source += self._render_chained(op, indent)
        return source

    def _render_constructor(self, op: Op, indent: int) -> str:
        z = self.z
        pad = INDENT * indent
        inner = INDENT * (indent + 1)
        name = op.name

        if name in ("string", "number", "boolean", "date", "any", "null"):
            return f"{z}.coerce.{name}()" if op.coerce else f"{z}.{name}()"
        if name == "literal":
            return f"{z}.literal({js_literal(op.args[0])})"
        if name == "enum":
            return f"{z}.enum({js_literal(list(op.args[0]))})"
        if name == "ref":
            return self.identifier(op.args[0])
        if name == "lazy":
            return f"{z}.lazy(() => {self.identifier(op.args[0])})"
        if name == "object":
            fields = op.args[0]
            if not fields:
                return f"{z}.object({{}})"
            lines = [
                f"{inner}{object_key(key)}: {self.render(value, indent + 1)},"
                for key, value in fields
            ]
            return f"{z}.object({{\n" + "\n".join(lines) + f"\n{pad}}})"
        if name == "record":
            key_expr, value_expr = op.args
            return f"{z}.record({self.render(key_expr, indent)}, {self.render(value_expr, indent)})"
        if name == "union":
            return f"{z}.union({self._render_list(op.args[0], indent)})"
        if name == "discriminatedUnion":
            discriminator, variants = op.args
            return (
                f"{z}.discriminatedUnion({js_literal(discriminator)}, "
                f"{self._render_list(variants, indent)})"
            )
        if name == "unsupported":
            wrapper, note = op.args
            return f"{z}.{wrapper}([\n{inner}// {note}\n{pad}])"
        raise ValueError(f"Cannot render constructor '{name}'")

    def _render_list(self, exprs, indent: int) -> str:
        inner = INDENT * (indent + 1)
        lines = [f"{inner}{self.render(e, indent + 1)}," for e in exprs]
        return "[\n" + "\n".join(lines) + f"\n{INDENT * indent}]"

    def _render_chained(self, op: Op, indent: int) -> str:
        if op.name in _SIMPLE_OPS:
            return f".{op.name}({', '.join(js_literal(a) for a in op.args)})"
        if op.name == "regex":
            return f".regex({regex_literal(op.args[0])})"
        if op.name == "catchall":
            return f".catchall({self.render(op.args[0], indent)})"
        if op.name == "refine":
            check: KeyCountCheck = op.args[0]
            return (
                f".refine((value) => Object.keys(value).length {check.comparator} {check.bound}, "
                f"{{ message: {js_literal(check.message)} }})"
            )
        if op.name == "superRefine":
            return self._render_key_check(op.args[0], indent)
        raise ValueError(f"Cannot render operation '{op.name}'")

    def _render_key_check(self, check: KeyPatternCheck, indent: int) -> str:
        pad = INDENT * indent
        lines: List[str] = [".superRefine((value, ctx) => {"]
        body = [
            "for (const key of Object.keys(value)) {",
        ]
        if check.declared_keys:
            body.append(f"{INDENT}if ({js_literal(list(check.declared_keys))}.includes(key)) continue;")
        body += [
            f"{INDENT}const result = {self.render(check.key_schema, indent + 2)}.safeParse(key);",
            f"{INDENT}if (!result.success) {{",
            f"{INDENT * 2}for (const issue of result.error.issues) {{",
            f"{INDENT * 3}ctx.addIssue({{ ...issue, path: [key, ...issue.path] }});",
            f"{INDENT * 2}}}",
            f"{INDENT}}}",
            "}",
        ]
        lines += [f"{pad}{INDENT}{line}" for line in body]
        lines.append(f"{pad}}})")
        return "\n".join(lines)
