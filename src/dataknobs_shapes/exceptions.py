"""Exceptions for the dataknobs_shapes package.

Built on the common exception framework from dataknobs_common. Validation
failures are reported as issue lists by the engine; these exceptions are only
raised by the caller-facing entry points and for misuse.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dataknobs_common import OperationError, ValidationError

if TYPE_CHECKING:
    from .result import Issue


class ShapeValidationError(ValidationError):
    """Raised by ``Shape.parse`` when the input is invalid.

    Transform callbacks may also raise it to report issues from inside a
    shape; the engine turns it back into an issue list.
    """

    def __init__(self, issues: list[Issue], message: str | None = None):
        self.issues = issues
        if message is None:
            message = _describe(issues)
        super().__init__(message, context={"issues": [issue.to_dict() for issue in issues]})


class AsyncShapeError(OperationError):
    """Raised when a blocking entry point is used on an async shape."""

    def __init__(self, shape_name: str):
        self.shape_name = shape_name
        super().__init__(
            f"{shape_name} is async, use parse_async() or validate_async()",
            context={"shape": shape_name},
        )


def _describe(issues: list[Issue]) -> str:
    if not issues:
        return "Invalid input"

    first = issues[0]
    text = first.message or first.code or "Invalid input"
    if first.path:
        text = f"{'.'.join(str(key) for key in first.path)}: {text}"
    if len(issues) > 1:
        text += f" (and {len(issues) - 1} more)"
    return text
