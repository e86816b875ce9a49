"""Check pipeline: ordered refinements attached to a shape.

A check is a callable ``(value, param, options)`` returning ``None`` when the
value passes, or an ``Issue`` / list of issues otherwise. Checks run after the
shape has validated the value's type and, for composites, its children.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Union

from .result import ApplyOptions, Issue, concat_issues

CheckResult = Union[Issue, Sequence[Issue], None]
CheckCallback = Callable[[Any, Any, ApplyOptions], CheckResult]
ApplyChecks = Callable[[Any, Union[list[Issue], None], ApplyOptions], Union[list[Issue], None]]
Message = Union[str, Callable[[Any, Any], str], None]

_UNSET = object()


@dataclass(frozen=True)
class Check:
    """A refinement attached to a shape.

    Attributes:
        key: Identity of the check; adding a check with an existing key
            replaces the old one
        callback: The check callable
        param: Parameter passed to the callback
        unsafe: Run even if the value already has issues
    """

    key: Any
    callback: CheckCallback
    param: Any = None
    unsafe: bool = False


class IssueFactory:
    """Builds single-issue lists for one constraint.

    The message is either a string, used verbatim, or a callable receiving
    ``(param, input)``. Without a message the default template is formatted
    with ``param``.
    """

    def __init__(
        self,
        code: str,
        default_message: str,
        message: Message = None,
        meta: Any = None,
        param: Any = None,
    ):
        """Initialize issue factory.

        Args:
            code: Issue code
            default_message: Message template used when no message is given
            message: Caller-supplied message or message callable
            meta: Arbitrary metadata attached to every issue
            param: Default issue parameter
        """
        self.code = code
        self.default_message = default_message
        self.message = message
        self.meta = meta
        self.param = param

    def __call__(self, input: Any, param: Any = _UNSET) -> list[Issue]:
        if param is _UNSET:
            param = self.param
        return [
            Issue(
                code=self.code,
                input=input,
                message=self._format(param, input),
                param=param,
                meta=self.meta,
            )
        ]

    def _format(self, param: Any, input: Any) -> str:
        if self.message is None:
            return self.default_message.format(param=param)
        if callable(self.message):
            return self.message(param, input)
        return self.message


def compose_checks(checks: Sequence[Check]) -> ApplyChecks | None:
    """Build the callable that runs a shape's checks in order.

    The returned callable receives the output value, the issues raised so far
    (or ``None``) and the apply options, and returns the updated issues. When
    issues were passed in only unsafe checks run. In fast mode it returns as
    soon as one check reports; in verbose mode every check runs.
    """
    if not checks:
        return None

    checks = tuple(checks)

    def apply_checks(
        output: Any, issues: list[Issue] | None, options: ApplyOptions
    ) -> list[Issue] | None:
        had_prior_issues = issues is not None

        for check in checks:
            if had_prior_issues and not check.unsafe:
                continue

            result = check.callback(output, check.param, options)

            if result is None:
                continue
            if isinstance(result, Issue):
                result = [result]
            elif not result:
                continue
            else:
                result = list(result)

            issues = concat_issues(issues, result)

            if not options.verbose:
                return issues

        return issues

    return apply_checks
