"""Issue and result types exchanged by every shape.

An apply call returns one of three things:

- ``None``: the input is valid and was not changed,
- ``Ok(value)``: the input is valid and ``value`` replaces it,
- ``list[Issue]``: the input is invalid.

``ValidationResult`` is the public, self-describing form returned by
``Shape.validate``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass
class Issue:
    """A single validation defect.

    ``path`` locates the defect inside the input. It is empty where the issue
    is raised and each enclosing composite prepends its own key or index.
    """

    code: str | None = None
    path: list[Any] = field(default_factory=list)
    input: Any = None
    message: str | None = None
    param: Any = None
    meta: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the issue to a dictionary.

        Returns:
            Dictionary with the issue fields; ``param`` and ``meta`` are
            included only when set
        """
        data: dict[str, Any] = {
            "code": self.code,
            "path": list(self.path),
            "input": self.input,
            "message": self.message,
        }
        if self.param is not None:
            data["param"] = self.param
        if self.meta is not None:
            data["meta"] = self.meta
        return data


@dataclass
class Ok:
    """Successful apply outcome carrying a new value."""

    value: Any


Result = Union[Ok, list[Issue], None]


@dataclass(frozen=True)
class ApplyOptions:
    """Options passed through a whole apply call.

    Attributes:
        verbose: Collect every issue instead of stopping at the first one
        coerced: Force every coercible shape to attempt coercion
    """

    verbose: bool = False
    coerced: bool = False


@dataclass
class ValidationResult:
    """Outcome of ``Shape.validate``.

    Allows ``if result:`` to check validity, like the other dataknobs result
    types.
    """

    ok: bool
    value: Any = None
    issues: list[Issue] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.ok

    @classmethod
    def success(cls, value: Any) -> ValidationResult:
        """Create a successful validation result.

        Args:
            value: The validated, possibly coerced, value

        Returns:
            Successful ValidationResult
        """
        return cls(ok=True, value=value, issues=[])

    @classmethod
    def failure(cls, issues: list[Issue]) -> ValidationResult:
        """Create a failed validation result.

        Args:
            issues: Issues raised by the shape

        Returns:
            Failed ValidationResult
        """
        return cls(ok=False, value=None, issues=issues)


def concat_issues(issues: list[Issue] | None, other: list[Issue]) -> list[Issue]:
    """Append ``other`` to ``issues``, which is created when absent."""
    if issues is None:
        return other
    issues.extend(other)
    return issues


def unshift_issues_path(issues: list[Issue], key: Any) -> list[Issue]:
    """Prepend ``key`` to the path of every issue."""
    for issue in issues:
        issue.path.insert(0, key)
    return issues
