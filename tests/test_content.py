"""Tests for content analysis."""

import os

import pytest

from docgraph.core.content import (
    analyze_content,
    extract_category,
    extract_keywords,
    extract_summary,
    extract_title,
    strip_markdown,
    truncate,
)


class TestStripMarkdown:
    """Markup removal."""

    def test_headings_and_emphasis(self):
        """Test that heading markers and emphasis characters go."""
        assert strip_markdown("## **Bold** _Title_").strip() == "bold title"

    def test_links_become_labels(self):
        """Test that links reduce to their label text."""
        assert strip_markdown("see [the Guide](guide.md) now") == "see the guide now"

    def test_images_dropped(self):
        """Test that image syntax is removed along with its alt text."""
        assert strip_markdown("before ![alt text](img.png) after") == "before  after"

    def test_code_removed(self):
        """Test that inline code and fenced blocks are removed."""
        text = "run `make all` then\n```bash\necho hidden\n```\ndone"
        stripped = strip_markdown(text)
        assert "make" not in stripped
        assert "hidden" not in stripped
        assert "done" in stripped

    def test_lists_tables_rules_quotes(self):
        """Test bullets, ordered markers, pipes, rules and quote markers."""
        text = "- item one\n1. first\n| a | b |\n---\n> quoted line"
        words = strip_markdown(text).split()
        assert words == ["item", "one", "first", "a", "b", "quoted", "line"]

    def test_every_angle_bracket_removed(self):
        """Test that '>' is stripped anywhere, not only at line start."""
        assert strip_markdown("a -> b").split() == ["a", "-b"]

    def test_indented_hash_is_not_a_heading(self):
        """Test that heading markers are only stripped at column zero."""
        assert strip_markdown("  # not heading").split() == ["#", "not", "heading"]


class TestKeywords:
    """Keyword ranking."""

    def test_frequency_order_with_stable_ties(self):
        """Test ranking by count with ties in first-seen order."""
        stripped = "graph node graph edge node graph zeta"
        assert extract_keywords(stripped) == ["graph", "node", "edge", "zeta"]

    def test_stopwords_and_short_words_dropped(self):
        """Test that stop words and short tokens are ignored."""
        stripped = "the and of an graph is to db"
        assert extract_keywords(stripped) == ["graph"]

    def test_punctuation_stripped(self):
        """Test that punctuation is cleaned from tokens."""
        assert extract_keywords("parser, parser. (parser)") == ["parser"]

    def test_hyphens_kept(self):
        """Test that hyphenated words survive cleaning."""
        assert extract_keywords("read-only read-only") == ["read-only"]

    def test_limit(self):
        """Test the default and explicit keyword limits."""
        words = " ".join(f"word{i:02d}" for i in range(30))
        assert len(extract_keywords(words)) == 15
        assert len(extract_keywords(words, limit=5)) == 5

    def test_stopword_filter_runs_before_cleaning(self):
        """Test that stop words are checked on the raw token."""
        # "the," is not a stop word until its comma is gone
        assert extract_keywords("the, the,") == ["the"]


class TestAnalyzeContent:
    """Metrics and structural flags."""

    def test_counts(self):
        """Test word count and token estimate."""
        text = "# Title\n\n" + " ".join(["alpha"] * 10)
        metrics = analyze_content(text)
        assert metrics.word_count == 11
        assert metrics.token_estimate == 14  # round(11 * 1.3 = 14.3)

    def test_token_estimate_rounds_half_up(self):
        """Test that 6.5 estimated tokens round to 7."""
        # 5 * 1.3 = 6.5
        metrics = analyze_content("one two three four five")
        assert metrics.word_count == 5
        assert metrics.token_estimate == 7

    def test_flags(self):
        """Test title, overview and related detection."""
        text = "# Title\n\n## Overview\n\ntext\n\n## Related\n\n- [A](a.md)\n"
        metrics = analyze_content(text)
        assert metrics.has_title
        assert metrics.has_overview_section
        assert metrics.has_related_section

    def test_flags_require_exact_headings(self):
        """Test that near-miss headings do not set flags."""
        text = "## Title only\n\n## Overview of things\n\n### Related\n"
        metrics = analyze_content(text)
        assert not metrics.has_title
        assert not metrics.has_overview_section
        assert not metrics.has_related_section

    def test_empty_document(self):
        """Test metrics for an empty file."""
        metrics = analyze_content("")
        assert metrics.word_count == 0
        assert metrics.token_estimate == 0
        assert metrics.keywords == ()


class TestIdentityHelpers:
    """Title, summary and category."""

    def test_title(self):
        """Test that the first top-level heading is the title."""
        assert extract_title("intro\n# My Doc  \n# Second") == "My Doc"
        assert extract_title("## Not a title") == ""

    def test_summary_prefers_overview(self):
        """Test that the overview paragraph wins over the first paragraph."""
        text = "# Doc\n\nFirst paragraph.\n\n## Overview\n\nThe overview\ncontinues here.\n\nLater.\n"
        assert extract_summary(text) == "The overview continues here."

    def test_summary_falls_back_to_first_paragraph(self):
        """Test the first paragraph after the title as fallback."""
        text = "# Doc\n\nFirst paragraph\nline two.\n\nSecond paragraph.\n"
        assert extract_summary(text) == "First paragraph line two."

    def test_summary_without_title(self):
        """Test that an untitled document has no summary."""
        assert extract_summary("just text") == ""

    def test_summary_truncated(self):
        """Test truncation to 200 characters with an ellipsis."""
        text = "# Doc\n\n" + "x" * 300
        summary = extract_summary(text)
        assert len(summary) == 200
        assert summary.endswith("...")

    def test_truncate_short_text_untouched(self):
        """Test that short text is returned unchanged."""
        assert truncate("short", 10) == "short"

    @pytest.mark.parametrize(
        "relative, expected",
        [
            ("index.md", "root"),
            ("guides/setup.md", "guides"),
            ("architecture/decisions/001.md", "decisions"),
        ],
    )
    def test_category(self, relative, expected):
        """Test category from the immediate parent folder."""
        root = os.path.abspath("/corpus")
        assert extract_category(root, os.path.join(root, relative)) == expected
