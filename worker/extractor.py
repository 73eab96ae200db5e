"""
Heuristic job-posting extraction from raw career-page HTML.

This is text mining, not HTML parsing: an ordered list of regex rules is run over fixed-size
windows of the page, candidate titles are cleaned and filtered, and each surviving title is
paired with the nearest job-looking link. Malformed markup and script noise are expected.
"""
from __future__ import annotations

import html
import re
from dataclasses import asdict, dataclass
from typing import Callable, Dict, List, Optional, Sequence
from urllib.parse import urljoin

# -------- LIMITS --------
MAX_TEXT_CHARS = 1_000_000
WINDOW_SIZE = 5000
# At least as long as the longest bounded rule match, so a posting that starts before a
# window boundary is seen whole by that window.
WINDOW_OVERLAP = 1500
CONTEXT_CHARS = 500
MAX_JOBS = 50
MIN_TITLE_LEN = 10
MAX_TITLE_LEN = 150
# ------------------------

ROLE_WORDS = (
    "engineer",
    "developer",
    "scientist",
    "analyst",
    "manager",
    "lead",
    "senior",
    "junior",
    "intern",
    "designer",
    "architect",
    "specialist",
    "coordinator",
    "director",
)

STOPLIST = (
    "cookie",
    "privacy",
    "javascript",
    "newsletter",
    "subscribe",
    "sign in",
    "log in",
    "terms of",
)

_ROLE = "(?:" + "|".join(ROLE_WORDS) + ")"
_FLAGS = re.IGNORECASE


@dataclass
class Candidate:
    """A tentative job posting pulled out of page text."""

    title: str
    url: str
    description: str = ""
    location: Optional[str] = None
    posted_date: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


def _title_group(match: re.Match) -> Optional[str]:
    return match.group("title")


@dataclass(frozen=True)
class Rule:
    """One extraction heuristic: a pattern plus how to pull a raw title out of a match."""

    name: str
    pattern: re.Pattern
    extract: Callable[[re.Match], Optional[str]] = _title_group


# Quantifiers are bounded so a single window can't trigger runaway backtracking.
DEFAULT_RULES: List[Rule] = [
    Rule(
        "structured_data",
        re.compile(
            r"""["'](?:title|job[_-]?title|position[_-]?title)["']\s*:\s*["'](?P<title>[^"'<>\n]{1,300})["']""",
            _FLAGS,
        ),
    ),
    Rule(
        "job_title_class",
        re.compile(
            r"""class=["'][^"'>]{0,200}job[^"'>]{0,200}title[^"'>]{0,200}["'][^>]{0,300}>\s*(?P<title>[^<]{1,300})<""",
            _FLAGS,
        ),
    ),
    Rule(
        "heading",
        re.compile(
            r"<h(?P<level>[1-6])\b[^>]{0,300}>\s*(?P<title>[^<]{0,150}?" + _ROLE + r"[^<]{0,150}?)\s*</h(?P=level)\s*>",
            _FLAGS,
        ),
    ),
    Rule(
        "title_attribute",
        re.compile(
            r"""\b(?:title|aria-label)=["'](?P<title>[^"'<>]{0,150}?""" + _ROLE + r"""[^"'<>]{0,150}?)["']""",
            _FLAGS,
        ),
    ),
    Rule(
        "anchor_text",
        re.compile(
            r"<a\b[^>]{0,500}>\s*(?P<title>[^<]{0,150}?" + _ROLE + r"[^<]{0,150}?)\s*</a\s*>",
            _FLAGS,
        ),
    ),
    Rule(
        "label",
        re.compile(
            r"""\b(?:job\s*title|position|title)\s*:\s*["']?(?P<title>[^"'<>{};\n]{1,300})""",
            _FLAGS,
        ),
    ),
]

_URL_PATTERNS = [
    re.compile(
        r"""href=["'](?P<url>[^"'\s>]{0,300}(?:job|career|position|opening|apply|vacanc)[^"'\s>]{0,300})["']""",
        _FLAGS,
    ),
    re.compile(r""""url"\s*:\s*"(?P<url>[^"\s]{1,500})\"""", _FLAGS),
]
_LOCATION_PATTERNS = [
    re.compile(r""""addressLocality"\s*:\s*"(?P<value>[^"<>\n]{1,100})\"""", _FLAGS),
    re.compile(r""""(?:job)?location"\s*:\s*"(?P<value>[^"<>\n]{1,100})\"""", _FLAGS),
]
_POSTED_PATTERNS = [
    re.compile(r""""datePosted"\s*:\s*"(?P<value>[^"<>\n]{4,40})\"""", _FLAGS),
]
_IGNORED_URL_PREFIXES = ("#", "javascript:", "mailto:", "tel:")


def clean_title(raw: str) -> str:
    """Unescape entities and JSON slashes, collapse whitespace, trim."""
    text = html.unescape(raw or "").replace("\\/", "/")
    return re.sub(r"\s+", " ", text).strip()


def is_acceptable_title(title: str) -> bool:
    """Reject boilerplate and markup fragments that the rules inevitably pick up."""
    if len(title) < MIN_TITLE_LEN or len(title) > MAX_TITLE_LEN:
        return False
    if "<" in title or ">" in title:
        return False
    if not any(ch.isalpha() for ch in title):
        return False
    lowered = title.lower()
    return not any(word in lowered for word in STOPLIST)


def _closest(patterns: Sequence[re.Pattern], context: str, anchor: int, group: str) -> Optional[str]:
    best: Optional[str] = None
    best_distance: Optional[int] = None
    for pattern in patterns:
        for m in pattern.finditer(context):
            value = (m.group(group) or "").strip()
            if not value:
                continue
            if group == "url" and value.lower().startswith(_IGNORED_URL_PREFIXES):
                continue
            distance = abs(m.start() - anchor)
            if best_distance is None or distance < best_distance:
                best, best_distance = value, distance
    return best


def resolve_url(href: str, source_url: str) -> str:
    href = html.unescape(href).replace("\\/", "/")
    if href.startswith(("http://", "https://")):
        return href
    return urljoin(source_url, href)


def _window_starts(length: int) -> range:
    return range(0, max(length, 1), WINDOW_SIZE)


def extract(
    html_text: str,
    source_url: str,
    *,
    rules: Sequence[Rule] = DEFAULT_RULES,
    max_jobs: int = MAX_JOBS,
) -> List[Candidate]:
    """
    Extract up to max_jobs candidates with case-insensitively unique titles.

    Matches are handled in page order (ties go to the earlier rule), so the first occurrence
    of a title on the page is the one kept, with the link nearest to it. Each window owns the
    matches that start inside it; the overlap only lets those matches run past its end.
    """
    text = (html_text or "")[:MAX_TEXT_CHARS]
    candidates: List[Candidate] = []
    seen: set[str] = set()

    for start in _window_starts(len(text)):
        window = text[start:start + WINDOW_SIZE + WINDOW_OVERLAP]
        hits = sorted(
            (
                (m.start(), order, rule, m)
                for order, rule in enumerate(rules)
                for m in rule.pattern.finditer(window)
                if m.start() < WINDOW_SIZE
            ),
            key=lambda hit: (hit[0], hit[1]),
        )
        for offset, _, rule, m in hits:
            raw = rule.extract(m)
            if not raw:
                continue
            title = clean_title(raw)
            if not is_acceptable_title(title):
                continue
            key = title.lower()
            if key in seen:
                continue

            position = start + offset
            ctx_start = max(0, position - CONTEXT_CHARS)
            context = text[ctx_start:position + CONTEXT_CHARS]
            anchor = position - ctx_start

            href = _closest(_URL_PATTERNS, context, anchor, "url")
            location = _closest(_LOCATION_PATTERNS, context, anchor, "value")
            posted = _closest(_POSTED_PATTERNS, context, anchor, "value")

            seen.add(key)
            candidates.append(
                Candidate(
                    title=title,
                    url=resolve_url(href, source_url) if href else source_url,
                    location=clean_title(location) if location else None,
                    posted_date=posted,
                )
            )
            if len(candidates) >= max_jobs:
                return candidates

    return candidates


__all__ = [
    "Candidate",
    "Rule",
    "DEFAULT_RULES",
    "ROLE_WORDS",
    "STOPLIST",
    "MAX_JOBS",
    "clean_title",
    "is_acceptable_title",
    "resolve_url",
    "extract",
]
