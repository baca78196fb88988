"""Content analysis for markdown documents.

Strips markup, counts words, estimates tokens, ranks keywords and detects the
structural sections a well-formed document is expected to carry.
"""

from __future__ import annotations

from collections import Counter
import os
import re
from typing import List

from docgraph.core.schemas import ContentMetrics
from docgraph.lib.numeric import round_half_up

TOKENS_PER_WORD = 1.3
MAX_KEYWORDS = 15
SUMMARY_MAX_CHARS = 200
ROOT_CATEGORY = "root"

STOPWORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with",
    "by", "from", "is", "are", "was", "were", "be", "been", "being", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might", "can", "shall",
    "not", "no", "nor", "so", "if", "then", "than", "that", "this", "these", "those",
    "it", "its", "as", "into", "through", "about", "up", "out", "all", "each", "every",
    "both", "few", "more", "most", "other", "some", "such", "only", "own", "same", "also",
    "just", "because", "any", "when", "which", "who", "how", "what", "where", "why",
    "while", "after", "before", "above", "below", "between", "under", "over", "during",
    "use", "used", "using", "new", "one", "two", "see", "e", "g", "i", "we", "you", "they",
    "my", "your", "our", "his", "her", "their", "me", "him", "us", "them",
})

# Applied in order. Images go before links so that image syntax is dropped
# whole instead of leaving its alt text behind.
_STRIP_RULES: List[tuple[re.Pattern[str], str]] = [
    (re.compile(r"^#{1,6}\s+", re.MULTILINE), ""),        # heading markers
    (re.compile(r"!\[[^\]]*\]\([^)]+\)"), ""),            # images
    (re.compile(r"\[([^\]]+)\]\([^)]+\)"), r"\1"),        # links -> label
    (re.compile(r"`{1,3}[^`]*`{1,3}"), ""),               # inline code
    (re.compile(r"```[\s\S]*?```"), ""),                  # fenced code
    (re.compile(r"[*_~]+"), ""),                          # emphasis
    (re.compile(r"^\s*[-*+]\s+", re.MULTILINE), ""),      # list bullets
    (re.compile(r"^\s*\d+\.\s+", re.MULTILINE), ""),      # ordered list markers
    (re.compile(r"\|"), " "),                             # table pipes
    (re.compile(r"---+"), ""),                            # horizontal rules
    (re.compile(r">\s*"), ""),                            # blockquote markers
]

_KEYWORD_CLEAN = re.compile(r"[^a-z0-9-]")
_TITLE_LINE = re.compile(r"^# (.+)$", re.MULTILINE)
_OVERVIEW_LINE = re.compile(r"^## Overview[ \t\r]*$", re.MULTILINE)
_RELATED_LINE = re.compile(r"^## Related[ \t\r]*$", re.MULTILINE)


def strip_markdown(text: str) -> str:
    """Reduce markdown to lower-cased plain words."""
    for pattern, replacement in _STRIP_RULES:
        text = pattern.sub(replacement, text)
    return text.lower()


def extract_keywords(stripped: str, limit: int = MAX_KEYWORDS) -> List[str]:
    """Rank words of stripped text by frequency.

    Ties keep first-seen order.
    """
    counts: Counter[str] = Counter()
    for word in stripped.split():
        if len(word) <= 2 or word in STOPWORDS:
            continue
        clean = _KEYWORD_CLEAN.sub("", word)
        if len(clean) > 2:
            counts[clean] += 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [word for word, _ in ranked[:limit]]


def analyze_content(text: str, max_keywords: int = MAX_KEYWORDS) -> ContentMetrics:
    """Compute word count, token estimate, keywords and structural flags."""
    stripped = strip_markdown(text)
    word_count = len(stripped.split())
    return ContentMetrics(
        word_count=word_count,
        token_estimate=round_half_up(word_count * TOKENS_PER_WORD),
        keywords=tuple(extract_keywords(stripped, max_keywords)),
        has_title=bool(_TITLE_LINE.search(text)),
        has_overview_section=bool(_OVERVIEW_LINE.search(text)),
        has_related_section=bool(_RELATED_LINE.search(text)),
    )


# ============================================================================
# Document identity helpers
# ============================================================================

def extract_title(text: str) -> str:
    match = _TITLE_LINE.search(text)
    return match.group(1).strip() if match else ""


def extract_summary(text: str, max_chars: int = SUMMARY_MAX_CHARS) -> str:
    """First paragraph under '## Overview', else the first paragraph after the title."""
    lines = text.splitlines()

    for index, line in enumerate(lines):
        if line.rstrip() == "## Overview":
            paragraph = _first_paragraph(lines[index + 1:])
            if paragraph:
                return truncate(paragraph, max_chars)
            break

    for index, line in enumerate(lines):
        if line.startswith("# "):
            return truncate(_first_paragraph(lines[index + 1:]), max_chars)
    return ""


def _first_paragraph(lines: List[str]) -> str:
    collected: List[str] = []
    for line in lines:
        stripped = line.strip()
        if not stripped:
            if collected:
                break
            continue
        if stripped.startswith("#"):
            break
        collected.append(stripped)
    return " ".join(collected)


def truncate(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 3] + "..."


def extract_category(root: str, file_path: str) -> str:
    """Name of the file's parent directory, or 'root' for top-level files."""
    relative = os.path.relpath(file_path, root)
    parts = relative.split(os.sep)
    if len(parts) == 1:
        return ROOT_CATEGORY
    return parts[-2]
