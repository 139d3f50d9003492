"""Error hierarchy for docsmd.

Neither transform raises on a reasonably shaped document tree or token
stream.  Errors are reserved for callers breaking an argument contract;
anything merely unusual in the input is reported as a
:class:`~docsmd.models.ConversionWarning` instead.

Every error carries a machine-readable ``code`` (an :class:`ErrorCode`
value), a ``message``, a structured ``context`` dict, and an optional
chained ``cause``::

    try:
        transformer.document_to_markdown(doc, tab_id="t.9")
    except DocsmdTabNotFoundError as exc:
        print(exc.code, exc.context["available_tab_ids"])
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar


class ErrorCode(str, Enum):
    """Machine-readable error codes for every error docsmd can raise."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    TAB_NOT_FOUND = "TAB_NOT_FOUND"


class DocsmdError(Exception):
    """Base exception for all docsmd errors.

    Parameters
    ----------
    message:
        A developer-friendly description of what went wrong.
    context:
        Structured diagnostic detail; each subclass documents its keys.
    cause:
        The underlying exception, if this error wraps another.  It is also
        set as ``__cause__``.
    code:
        Overrides the class's :attr:`default_code`.
    """

    default_code: ClassVar[str] = ""

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context or {}
        self.cause = cause
        self.code: str = code if code is not None else self.default_code
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class DocsmdValidationError(DocsmdError):
    """An argument passed to a transform is outside its contract.

    Context keys: ``field``, ``value``, ``constraint``.
    """

    default_code = ErrorCode.VALIDATION_ERROR


class DocsmdTabNotFoundError(DocsmdValidationError):
    """An explicit ``tab_id`` does not exist in the document.

    Context keys: ``tab_id``, ``available_tab_ids`` (in document order,
    child tabs after their parent).
    """

    default_code = ErrorCode.TAB_NOT_FOUND
