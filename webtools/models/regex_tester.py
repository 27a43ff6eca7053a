"""
Regular expression tester.

Patterns are compiled with Python's ``re`` module. Replacement strings accept
JavaScript-style tokens (``$1``, ``$&``, ``$$``) so saved patterns keep
working; they are expanded per match instead of being handed to ``re.sub``.
"""

import logging
import re
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

_JS_TOKEN = re.compile(r"\$(\$|&|\d{1,2})")


class RegexFlags(BaseModel):
    global_: bool = Field(default=True, alias="global")
    ignore_case: bool = False
    multiline: bool = False

    model_config = ConfigDict(populate_by_name=True)

    def letters(self) -> str:
        """Flags in their short ``gim`` form."""
        return (
            ("g" if self.global_ else "")
            + ("i" if self.ignore_case else "")
            + ("m" if self.multiline else "")
        )

    def re_flags(self) -> int:
        value = 0
        if self.ignore_case:
            value |= re.IGNORECASE
        if self.multiline:
            value |= re.MULTILINE
        return value


class RegexTestInput(BaseModel):
    pattern: str = ""
    test_string: str = ""
    flags: RegexFlags = Field(default_factory=RegexFlags)
    replacement: Optional[str] = None


class RegexMatch(BaseModel):
    match: str
    index: int
    groups: List[Optional[str]] = Field(default_factory=list)


class RegexTestResult(BaseModel):
    pattern: str
    flags: str
    test_string_length: int
    is_valid: bool
    error: Optional[str] = None
    matches: List[RegexMatch] = Field(default_factory=list)
    replaced_text: Optional[str] = None


class CommonPattern(BaseModel):
    name: str
    pattern: str


COMMON_PATTERNS: List[CommonPattern] = [
    CommonPattern(name="Email", pattern=r"^[\w\.-]+@[\w\.-]+\.[a-zA-Z]{2,}$"),
    CommonPattern(name="Phone", pattern=r"^\+?[1-9]\d{1,14}$"),
    CommonPattern(
        name="URL",
        pattern=(
            r"^https?:\/\/(www\.)?[-a-zA-Z0-9@:%._\+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}"
            r"\b([-a-zA-Z0-9()@:%_\+.~#?&//=]*)$"
        ),
    ),
    CommonPattern(name="Date (YYYY-MM-DD)", pattern=r"^\d{4}-\d{2}-\d{2}$"),
    CommonPattern(name="Time (HH:MM)", pattern=r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"),
    CommonPattern(
        name="Credit Card", pattern=r"^\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{4}$"
    ),
    CommonPattern(name="Hex Color", pattern=r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$"),
    CommonPattern(
        name="IPv4 Address",
        pattern=(
            r"^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
            r"(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$"
        ),
    ),
]


def expand_replacement(template: str, match: "re.Match[str]") -> str:
    """Expand ``$&``, ``$n`` and ``$$`` against a single match."""

    def token(found: "re.Match[str]") -> str:
        name = found.group(1)
        if name == "$":
            return "$"
        if name == "&":
            return match.group(0)
        number = int(name)
        if 1 <= number <= (match.re.groups or 0):
            return match.group(number) or ""
        # Unknown group references are left untouched
        return found.group(0)

    return _JS_TOKEN.sub(token, template)


def run_regex_test(data: RegexTestInput) -> RegexTestResult:
    """
    Run a pattern against the test string.

    An invalid pattern is reported inline with ``is_valid=False``.
    """
    result = RegexTestResult(
        pattern=data.pattern,
        flags=data.flags.letters(),
        test_string_length=len(data.test_string),
        is_valid=True,
    )
    if not data.pattern:
        return result

    try:
        compiled = re.compile(data.pattern, data.flags.re_flags())
    except re.error as e:
        logger.debug(f"Invalid pattern {data.pattern!r}: {e}")
        result.is_valid = False
        result.error = str(e)
        return result

    if data.flags.global_:
        found = list(compiled.finditer(data.test_string))
    else:
        first = compiled.search(data.test_string)
        found = [first] if first else []

    result.matches = [
        RegexMatch(match=m.group(0), index=m.start(), groups=list(m.groups()))
        for m in found
    ]

    if data.replacement:
        result.replaced_text = compiled.sub(
            lambda m: expand_replacement(data.replacement, m),
            data.test_string,
            count=0 if data.flags.global_ else 1,
        )

    return result


def format_report(result: RegexTestResult, generated_at: Optional[datetime] = None) -> str:
    """Plain-text report of a test run, blank lines dropped."""
    generated_at = generated_at or datetime.now()
    lines = [
        "Regex Test Results",
        "=" * 20,
        "",
        f"Pattern: /{result.pattern}/{result.flags}",
        f"Valid: {str(result.is_valid).lower()}",
        f"Error: {result.error}" if result.error else "",
        "",
        f"Test Text Length: {result.test_string_length} characters",
        f"Total Matches: {len(result.matches)}",
        "",
        "Matches:",
    ]
    for number, match in enumerate(result.matches, start=1):
        line = f'{number}. "{match.match}" at position {match.index}'
        if match.groups:
            line += f" (Groups: {', '.join(g or '' for g in match.groups)})"
        lines.append(line)
    if result.replaced_text:
        lines.extend(["Replacement Result:", result.replaced_text])
    lines.append(f"Generated at: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}")
    return "\n".join(line for line in lines if line != "")
