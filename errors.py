"""Diagnostics reported by the parser.

The lexer is total and never reports anything. The parser reports two kinds
of problems, both collected on the `ParseResult` instead of aborting:

- `UnexpectedToken`: a required token is missing or a different token was
    found (e.g. a missing `)` or `;`). Severity `error`.
- `UnsupportedConstruct`: input that is recognized but not implemented by
    this front end (variable declarations, loops, parameter lists). Severity
    `warning`; the parser skips the construct and carries on.

`ParseError` is the exception used inside the parser to unwind a failed
production back to its checkpoint. It always carries the diagnostic that
will be recorded once the parser has recovered.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
from tokens import Token


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Diagnostic:
    message: str
    line: int
    column: int
    severity: Severity = Severity.ERROR
    suggestions: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.line, self.column)

    def __str__(self) -> str:
        result = f"{self.severity}: {self.message} at line {self.line}, column {self.column}"
        for suggestion in self.suggestions:
            result += f"\n  help: {suggestion}"
        return result


@dataclass(frozen=True)
class UnexpectedToken(Diagnostic):
    expected: str = ""
    found: Optional[Token] = None

    @classmethod
    def at(
        cls,
        expected: str,
        found: Optional[Token],
        position: Tuple[int, int],
        suggestions: Tuple[str, ...] = (),
    ) -> "UnexpectedToken":
        got = f"'{found.lexeme}'" if found is not None else "end of input"
        line, column = position
        return cls(
            message=f"Expected {expected}, got {got}",
            line=line,
            column=column,
            severity=Severity.ERROR,
            suggestions=suggestions,
            expected=expected,
            found=found,
        )


@dataclass(frozen=True)
class UnsupportedConstruct(Diagnostic):
    construct: str = ""

    @classmethod
    def at(
        cls,
        construct: str,
        position: Tuple[int, int],
        severity: Severity = Severity.WARNING,
    ) -> "UnsupportedConstruct":
        line, column = position
        return cls(
            message=f"Unsupported construct: {construct}",
            line=line,
            column=column,
            severity=severity,
            construct=construct,
        )


class ParseError(SyntaxError):
    """Raised inside a production that cannot continue.

    The parser catches it at declaration/statement level, restores its
    cursor and records `diagnostic`. `ParseResult.raise_for_errors` also
    raises it for callers that want strict behavior.
    """

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(str(diagnostic))
        self.diagnostic = diagnostic
