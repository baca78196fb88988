"""Markdown link extraction.

Links are returned as one ordered sequence tagged by kind: links listed in a
structural section (e.g. ``## Related``) come first in document order, followed
by the remaining in-body links. Only ``.md`` targets are considered.
"""

from dataclasses import dataclass
import os
import re
from typing import List, Optional, Sequence, Tuple

from docgraph.core.identity import SectionPattern, default_sections
from docgraph.core.schemas import LinkKind

# - [label](target.md)
STRUCTURAL_LINK_PATTERN = re.compile(r"- \[([^\]]+)\]\(([^)]+\.md)\)")
# [label](target.md), but not ![alt](target.md)
INLINE_LINK_PATTERN = re.compile(r"(?<!!)\[([^\]]+)\]\(([^)]+\.md)\)")
URL_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")
HEADING_PATTERN = re.compile(r"^(#{1,6}) ")


@dataclass(frozen=True)
class ExtractedLink:
    """A link found in a document, with its target resolved to an absolute path."""
    label: str
    target: str
    kind: LinkKind


def resolve_target(base_dir: str, target: str) -> Optional[str]:
    """Resolve a link target against the linking document's directory.

    Returns None for web links, which are not part of the corpus.
    """
    target = target.strip()
    if URL_SCHEME_PATTERN.match(target):
        return None
    return os.path.abspath(os.path.join(base_dir, target))


class LinkExtractor:
    """Extract structural and inline links from markdown text."""

    def __init__(self, sections: Optional[Sequence[SectionPattern]] = None):
        self.sections: List[SectionPattern] = list(
            sections if sections is not None else default_sections()
        )

    def extract(self, text: str, base_dir: str) -> List[ExtractedLink]:
        """Return structural links followed by inline links, both in document order."""
        lines = text.splitlines()
        spans = self._section_spans(lines)

        links: List[ExtractedLink] = []
        for start, end, _ in spans:
            body = "\n".join(lines[start:end])
            links.extend(self._match(STRUCTURAL_LINK_PATTERN, body, base_dir, LinkKind.STRUCTURAL))

        stripped = set()
        for start, end, pattern in spans:
            if pattern.strip_from_inline:
                # The heading line goes too
                stripped.update(range(start - 1, end))
        remaining = "\n".join(line for i, line in enumerate(lines) if i not in stripped)
        links.extend(self._match(INLINE_LINK_PATTERN, remaining, base_dir, LinkKind.INLINE))
        return links

    def _section_spans(self, lines: List[str]) -> List[Tuple[int, int, SectionPattern]]:
        """Find (body_start, body_end, pattern) for every structural section.

        A body runs from the line after the heading up to, not including, the
        next heading that closes it. Level 1 and 2 sections close only at a
        heading of their own level; deeper sections also close at any
        shallower heading.
        """
        spans: List[Tuple[int, int, SectionPattern]] = []
        for index, line in enumerate(lines):
            heading = line.rstrip()
            for pattern in self.sections:
                if heading != pattern.marker:
                    continue
                end = len(lines)
                for j in range(index + 1, len(lines)):
                    if _closes_section(lines[j], pattern.level):
                        end = j
                        break
                spans.append((index + 1, end, pattern))
                break
        return spans

    @staticmethod
    def _match(
        pattern: re.Pattern, text: str, base_dir: str, kind: LinkKind
    ) -> List[ExtractedLink]:
        found: List[ExtractedLink] = []
        for match in pattern.finditer(text):
            target = resolve_target(base_dir, match.group(2))
            if target is None:
                continue
            found.append(ExtractedLink(label=match.group(1), target=target, kind=kind))
        return found


def _closes_section(line: str, level: int) -> bool:
    match = HEADING_PATTERN.match(line)
    if match is None:
        return False
    found = len(match.group(1))
    if level <= 2:
        return found == level
    return found <= level
