"""
cexpr CLI.

Commands:
- eval: evaluate one or more expressions against a shared symbol table
- tokens: show the token stream of an expression
- ast: show the parsed tree of an expression
"""

from __future__ import annotations

import platform
import re
import sys

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from cexpr._version import __version__
from cexpr.core.environment import LogLevel, configure_logging
from cexpr.core.errors import ExpressionError, NestingTooDeepError
from cexpr.core.expression_lang import eval_expr, parse_expr, tokenize
from cexpr.core.ir.expressions import (
    AssignExpr,
    BinaryExpr,
    ConditionalExpr,
    Expr,
    IntegerLiteral,
    UnaryExpr,
    Variable,
)
from cexpr.core.symbols import SymbolTable
from cexpr.core.value import Value

console = Console()
err_console = Console(stderr=True)

_FLOAT_RE = re.compile(r"[+-]?(\d+\.\d*|\.\d+|\d+(\.\d*)?[eE][+-]?\d+)")
_BINDING_RE = re.compile(r"(%?[a-zA-Z][a-zA-Z0-9]*)=(.+)")


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"cexpr {__version__}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


app = typer.Typer(
    help="""cexpr – C-style expression evaluator

Examples:
  cexpr eval "1 + 2 * 3"
  cexpr eval --var a=5 "a <<= 2" "a ? a : -1"
  cexpr tokens "x += 0xFF"
  cexpr ast "a = b ? c : d"
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """cexpr CLI main callback for global options."""
    configure_logging(LogLevel.DEBUG if verbose else None)


def _fail(error: ExpressionError) -> typer.Exit:
    err_console.print(Text(f"✗ {error}", style="bold red"))
    return typer.Exit(code=1)


def parse_binding(binding: str) -> tuple[str, Value]:
    """Parse a NAME=VALUE option into a name and a Value.

    VALUE is a float literal (1.5, 2e3) or any constant integer expression
    (42, 0xFF, -1, 1<<4).
    """
    m = _BINDING_RE.fullmatch(binding.strip())
    if not m:
        raise typer.BadParameter(f"expected NAME=VALUE, got {binding!r}", param_hint="--var")
    name, text = m.group(1), m.group(2).strip()
    if _FLOAT_RE.fullmatch(text):
        return name, Value.of_float(float(text))
    try:
        return name, eval_expr(text)
    except ExpressionError as e:
        raise typer.BadParameter(f"invalid value for {name}: {e.message}", param_hint="--var") from e


def format_value(value: Value, show_raw: bool = False) -> str:
    """Format a result, optionally prefixed with its raw 32-bit pattern."""
    if show_raw:
        return f"(0x{value.raw:08x}) {value}"
    return str(value)


@app.command(name="eval")
def eval_command(
    expressions: list[str] = typer.Argument(..., help="Expressions, evaluated in order"),
    var: list[str] | None = typer.Option(
        None, "--var", "-D", help="Bind NAME=VALUE before evaluating (repeatable)"
    ),
    show_raw: bool = typer.Option(
        False, "--hex", "-x", help="Prefix each result with its raw 32-bit pattern"
    ),
    show_symbols: bool = typer.Option(
        False, "--symbols", "-s", help="Print every variable after evaluating"
    ),
) -> None:
    """Evaluate expressions against one shared symbol table."""
    symbols = SymbolTable()
    for binding in var or []:
        name, value = parse_binding(binding)
        symbols.set(name, value)

    for source in expressions:
        try:
            result = eval_expr(source, symbols)
        except ExpressionError as e:
            raise _fail(e) from e
        typer.echo(format_value(result, show_raw))

    if show_symbols:
        for name, value in symbols.items():
            typer.echo(f"{name} = {value}")


@app.command(name="tokens")
def tokens_command(
    expression: str = typer.Argument(..., help="Expression to tokenize"),
) -> None:
    """Show the token stream of an expression."""
    try:
        tokens = tokenize(expression)
    except ExpressionError as e:
        raise _fail(e) from e

    table = Table(title="Tokens")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Text")
    table.add_column("Pos", justify="right")
    for i, tok in enumerate(tokens):
        table.add_row(str(i), tok.kind.name, Text(tok.value), str(tok.pos))
    console.print(table)


def _ast_label(expr: Expr) -> str:
    match expr:
        case IntegerLiteral():
            return f"IntegerLiteral {expr.value}"
        case Variable():
            kind = "Register" if expr.is_register else "Variable"
            return f"{kind} {expr.name}"
        case UnaryExpr():
            return f"UnaryExpr {expr.op.value}"
        case BinaryExpr():
            return f"BinaryExpr {expr.op.value}"
        case ConditionalExpr():
            return "ConditionalExpr ?:"
        case AssignExpr():
            return f"AssignExpr {expr.op.value}"
    return type(expr).__name__


def _ast_children(expr: Expr) -> list[Expr]:
    match expr:
        case UnaryExpr():
            return [expr.operand]
        case BinaryExpr():
            return [expr.left, expr.right]
        case ConditionalExpr():
            return [expr.condition, expr.then_expr, expr.else_expr]
        case AssignExpr():
            return [expr.target, expr.value]
    return []


def build_tree(expr: Expr, tree: Tree | None = None) -> Tree:
    """Render an AST as a rich Tree."""
    label = Text(_ast_label(expr))
    node = Tree(label) if tree is None else tree.add(label)
    for child in _ast_children(expr):
        build_tree(child, node)
    return node


@app.command(name="ast")
def ast_command(
    expression: str = typer.Argument(..., help="Expression to parse"),
) -> None:
    """Show the parsed tree of an expression."""
    try:
        expr = parse_expr(expression)
    except ExpressionError as e:
        raise _fail(e) from e

    try:
        tree, rendered = build_tree(expr), str(expr)
    except RecursionError as e:
        raise _fail(NestingTooDeepError()) from e

    console.print(tree)
    console.print(Text(rendered, style="cyan"))


def main(argv: list[str] | None = None) -> None:
    app(args=argv if argv is not None else sys.argv[1:], standalone_mode=True)


if __name__ == "__main__":
    main()
