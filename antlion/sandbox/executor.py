"""Executor — one build-and-run cycle that turns an expression into a typed value.

Cycle (all under the workspace guard):
  1. Render the wrapper program and overwrite the entry point
  2. Drop any stale output file from an earlier failed run
  3. backend.build_and_run()
  4. Non-zero exit            -> ExecutionError (exit code + stderr)
     Zero exit, no output     -> ExecutionError
  5. Read output, parse into the requested type (ParseError on failure)
  6. Delete the output file

On a parse failure the output file is left in place for inspection.
"""

from __future__ import annotations

import ast
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import TypeAdapter, ValidationError

from antlion.errors import BackendError, ExecutionError, ParseError

if TYPE_CHECKING:
    from antlion.sandbox.workspace import Sandbox

logger = structlog.get_logger().bind(component="sandbox.executor")

OUTPUT_FILE = "output"


def evaluate(
    sandbox: Sandbox,
    expression: str,
    result_type: Any = str,
    *,
    parser: Callable[[str], Any] | None = None,
) -> Any:
    """Evaluate `expression` inside the sandbox and parse its str() form."""
    if not expression.strip():
        raise ExecutionError("Expression is empty")

    with sandbox.guard.hold("eval"):
        backend = sandbox.backend
        output_path = sandbox.output_path
        try:
            sandbox.entry_point_path.write_text(
                backend.render(expression, OUTPUT_FILE), encoding="utf-8"
            )
            output_path.unlink(missing_ok=True)
        except OSError as exc:
            raise ExecutionError(f"Cannot prepare {sandbox.root}: {exc}") from exc

        try:
            result = backend.build_and_run(sandbox.root)
        except (OSError, BackendError) as exc:
            logger.warning("eval_failed", sandbox_id=sandbox.sandbox_id, error=str(exc))
            raise ExecutionError(f"Cannot build and run {sandbox.root}: {exc}") from exc
        if not result.ok:
            logger.warning(
                "eval_failed",
                sandbox_id=sandbox.sandbox_id,
                exit_code=result.exit_code,
                error=result.stderr_tail()[:200],
            )
            raise ExecutionError(
                f"Evaluation exited with status {result.exit_code}:\n{result.stderr_tail()}",
                exit_code=result.exit_code,
                stderr=result.stderr,
            )

        try:
            text = output_path.read_bytes().decode("utf-8")
        except FileNotFoundError as exc:
            raise ExecutionError(
                f"Evaluation produced no {OUTPUT_FILE} file in {sandbox.root}",
                exit_code=result.exit_code,
                stderr=result.stderr,
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ExecutionError(f"Cannot read {output_path}: {exc}") from exc

        value = parse_output(text, result_type, parser=parser)
        output_path.unlink()
        sandbox.evaluations += 1

    logger.info(
        "eval_complete",
        sandbox_id=sandbox.sandbox_id,
        duration_ms=result.duration_ms,
        output_len=len(text),
    )
    return value


def parse_output(
    text: str,
    result_type: Any = str,
    *,
    parser: Callable[[str], Any] | None = None,
) -> Any:
    """Convert captured text to `result_type`, or via `parser` when given.

    Scalars validate straight from the text ("4" -> int). Containers are
    str()'d as Python literals, so a literal_eval pass is tried second.
    """
    if parser is not None:
        try:
            return parser(text)
        except (ValueError, TypeError, SyntaxError, MemoryError, RecursionError) as exc:
            raise ParseError(f"Cannot parse {text[:80]!r}: {exc}", text=text) from exc

    adapter = TypeAdapter(result_type)
    try:
        return adapter.validate_python(text)
    except ValidationError as first:
        try:
            literal = ast.literal_eval(text.strip())
        except (ValueError, SyntaxError, MemoryError, RecursionError):
            raise ParseError(
                f"Cannot parse {text[:80]!r} as {result_type!r}",
                text=text,
                result_type=result_type,
            ) from first
        try:
            return adapter.validate_python(literal)
        except ValidationError as exc:
            raise ParseError(
                f"Cannot parse {text[:80]!r} as {result_type!r}",
                text=text,
                result_type=result_type,
            ) from exc
