"""
Event-type ruleset — ordered (pattern → canonical category) table loaded from CSV.

Rules are evaluated top to bottom and the first match wins, so broad
patterns ("wind", "flood") must sit below the specific ones that share
their words ("wind chill", "flash flood").
"""
from __future__ import annotations

import io
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional

import pandas as pd

from storm_analytics.config import CANONICAL_CATEGORIES, RULES_FILE
from storm_analytics.errors import RulesetError

RULE_KINDS = ("exact", "substring", "regex")

_WHITESPACE_RE = re.compile(r"\s+")


def clean_event_text(text) -> str:
    """Case-fold and collapse whitespace in a free-text event type."""
    if text is None or (isinstance(text, float) and pd.isna(text)):
        return ""
    return _WHITESPACE_RE.sub(" ", str(text).lower()).strip()


@dataclass(frozen=True)
class EventTypeRule:
    pattern: str
    category: str
    kind: str = "regex"
    line: int = 0
    _regex: Optional[re.Pattern] = field(default=None, repr=False, compare=False)

    @classmethod
    def build(cls, pattern: str, category: str, kind: str = "regex", line: int = 0) -> "EventTypeRule":
        """Validate and (for regex rules) compile a single rule."""
        kind = (kind or "regex").strip().lower()
        if kind not in RULE_KINDS:
            raise RulesetError(f"line {line}: unknown rule kind {kind!r} (expected one of {RULE_KINDS})")
        if category not in CANONICAL_CATEGORIES:
            raise RulesetError(f"line {line}: {category!r} is not a canonical event category")
        if not pattern:
            raise RulesetError(f"line {line}: empty pattern")

        regex = None
        if kind == "regex":
            try:
                regex = re.compile(pattern, re.IGNORECASE)
            except re.error as exc:
                raise RulesetError(f"line {line}: invalid regex {pattern!r}: {exc}") from exc
        else:
            pattern = clean_event_text(pattern)
        return cls(pattern=pattern, category=category, kind=kind, line=line, _regex=regex)

    def matches(self, text: str) -> bool:
        """Test an already-cleaned event text."""
        if self.kind == "exact":
            return text == self.pattern
        if self.kind == "substring":
            return self.pattern in text
        return self._regex.search(text) is not None


class RuleSet:
    """Ordered, first-match-wins event-type rules."""

    def __init__(self, rules: Iterable[EventTypeRule], source: str = "<memory>") -> None:
        self.rules: tuple[EventTypeRule, ...] = tuple(rules)
        self.source = source
        if not self.rules:
            raise RulesetError(f"Ruleset {source} contains no rules")

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple], source: str = "<memory>") -> "RuleSet":
        """Build from (pattern, category) or (pattern, category, kind) tuples."""
        rules = []
        for i, pair in enumerate(pairs, 1):
            pattern, category, *rest = pair
            rules.append(EventTypeRule.build(pattern, category, rest[0] if rest else "regex", line=i))
        return cls(rules, source=source)

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[EventTypeRule]:
        return iter(self.rules)

    def match_clean(self, text: str) -> str | None:
        """Category for cleaned text, or None when no rule matches."""
        if not text:
            return None
        for rule in self.rules:
            if rule.matches(text):
                return rule.category
        return None

    def match(self, raw_text) -> str | None:
        """Category for a raw event-type string, or None when unmatched."""
        return self.match_clean(clean_event_text(raw_text))

    def categories(self) -> list[str]:
        """Canonical categories reachable through at least one rule."""
        seen = dict.fromkeys(rule.category for rule in self.rules)
        return list(seen)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_rules(path: str | Path = RULES_FILE) -> RuleSet:
    """Load an ordered ruleset CSV with columns pattern, category[, kind].

    Lines starting with '#' are comments; a '#' inside a pattern is kept.
    Error messages carry the line number in the file. Any problem with the
    file is fatal.
    """
    path = Path(path)
    if not path.exists():
        raise RulesetError(f"Ruleset file not found: {path}")

    with open(path, encoding="utf-8") as f:
        numbered = [
            (lineno, line) for lineno, line in enumerate(f, 1)
            if line.strip() and not line.lstrip().startswith("#")
        ]
    # first kept line is the header
    row_lines = [lineno for lineno, _ in numbered[1:]]

    try:
        df = pd.read_csv(
            io.StringIO("".join(line for _, line in numbered)),
            dtype=str, keep_default_na=False,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise RulesetError(f"Could not parse ruleset {path.name}: {exc}") from exc

    missing = {"pattern", "category"} - set(df.columns)
    if missing:
        raise RulesetError(f"Ruleset {path.name} is missing column(s): {sorted(missing)}")
    if "kind" not in df.columns:
        df["kind"] = "regex"

    rules = []
    for lineno, row in zip(row_lines, df.itertuples(index=False)):
        rules.append(EventTypeRule.build(
            pattern=row.pattern.strip(),
            category=row.category.strip(),
            kind=row.kind,
            line=lineno,
        ))
    return RuleSet(rules, source=str(path))
