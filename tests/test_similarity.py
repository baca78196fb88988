"""Tests for keyword similarity suggestions."""

from docgraph.core.schemas import DirectedEdge, LinkKind
from docgraph.core.similarity import KeywordProfile, jaccard, suggest_similar


def _profile(node_id: str, *keywords: str) -> KeywordProfile:
    return KeywordProfile(id=node_id, label=node_id.upper(), keywords=tuple(keywords))


def test_jaccard():
    """Test Jaccard similarity, including two empty sets."""
    assert jaccard({"a", "b", "c", "d"}, {"a", "b", "c", "e"}) == 0.6
    assert jaccard(set(), set()) == 0.0


def test_three_of_five_keywords_scores_point_six():
    """Test that three shared keywords of five score 0.6."""
    profiles = [
        _profile("x", "graph", "node", "edge", "parser"),
        _profile("y", "graph", "node", "edge", "render"),
    ]

    suggestions = suggest_similar(profiles, [])

    assert len(suggestions) == 1
    suggestion = suggestions[0]
    assert (suggestion.node_a_id, suggestion.node_b_id) == ("x", "y")
    assert suggestion.node_a_label == "X"
    assert suggestion.score == 0.6


def test_each_pair_reported_once():
    """Test that a pair appears once, not in both orders."""
    profiles = [_profile("x", "alpha", "beta"), _profile("y", "alpha", "beta")]

    suggestions = suggest_similar(profiles, [])

    assert [(s.node_a_id, s.node_b_id) for s in suggestions] == [("x", "y")]


def test_linked_pairs_skipped_in_either_direction():
    """Test that already linked pairs are skipped."""
    profiles = [_profile("x", "alpha", "beta"), _profile("y", "alpha", "beta")]
    edge = DirectedEdge(source="y", target="x", label="x", kind=LinkKind.INLINE)

    assert suggest_similar(profiles, [edge]) == []


def test_documents_without_keywords_never_compared():
    """Test that keywordless documents are excluded."""
    profiles = [_profile("x"), _profile("y")]

    assert suggest_similar(profiles, [], threshold=0.0) == []


def test_threshold_applies_to_unrounded_score():
    """Test that the threshold compares the raw score."""
    # 1/7 = 0.1428..., just under the default threshold
    profiles = [
        _profile("x", "alpha", "beta", "gamma", "delta"),
        _profile("y", "alpha", "omega", "sigma", "kappa"),
    ]

    assert suggest_similar(profiles, []) == []
    assert len(suggest_similar(profiles, [], threshold=0.14)) == 1


def test_sorted_descending_and_capped():
    """Test ordering, tie order and the suggestion cap."""
    profiles = [
        _profile("a", "alpha", "beta", "gamma", "delta"),
        _profile("b", "alpha", "beta", "gamma", "omega"),
        _profile("c", "alpha", "beta", "gamma", "delta"),
    ]

    suggestions = suggest_similar(profiles, [])

    assert [s.score for s in suggestions] == [1.0, 0.6, 0.6]
    assert (suggestions[0].node_a_id, suggestions[0].node_b_id) == ("a", "c")
    # ties keep pair order
    assert [(s.node_a_id, s.node_b_id) for s in suggestions[1:]] == [("a", "b"), ("b", "c")]

    assert len(suggest_similar(profiles, [], limit=2)) == 2
    assert suggest_similar(profiles, [], limit=0) == []
