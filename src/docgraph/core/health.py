"""Per-document health scoring and validation warnings."""

from typing import List, Sequence, Tuple

from docgraph.core.schemas import HealthBreakdown, ValidationWarning, WarningType
from docgraph.lib.numeric import round_half_up

MIN_WORDS = 50

TITLE_POINTS = 10
OVERVIEW_POINTS = 15
OUTGOING_POINTS = 15
INCOMING_POINTS = 15
LENGTH_POINTS = 10
RELATED_POINTS = 10
NO_BROKEN_POINTS = 10
BIDIRECTIONAL_POINTS = 15

_COMPONENTS = tuple(HealthBreakdown.model_fields)


def score_node(
    *,
    has_title: bool,
    has_overview_section: bool,
    has_related_section: bool,
    word_count: int,
    in_degree: int,
    out_degree: int,
    broken_outgoing_count: int,
    bidirectional_ratio: float,
) -> HealthBreakdown:
    """Compute the additive health breakdown for one document."""
    if word_count >= MIN_WORDS:
        length = LENGTH_POINTS
    else:
        length = round_half_up(word_count / MIN_WORDS * LENGTH_POINTS)
    return HealthBreakdown(
        has_title=TITLE_POINTS if has_title else 0,
        has_overview=OVERVIEW_POINTS if has_overview_section else 0,
        has_outgoing_links=OUTGOING_POINTS if out_degree > 0 else 0,
        has_incoming_links=INCOMING_POINTS if in_degree > 0 else 0,
        adequate_length=length,
        has_related_section=RELATED_POINTS if has_related_section else 0,
        no_broken_links=NO_BROKEN_POINTS if broken_outgoing_count == 0 else 0,
        bidirectional_ratio=round_half_up(bidirectional_ratio * BIDIRECTIONAL_POINTS),
    )


def aggregate(breakdowns: Sequence[HealthBreakdown]) -> Tuple[int, HealthBreakdown]:
    """Corpus score and breakdown.

    The score is the rounded mean of node totals; each breakdown component is
    its own rounded mean, so the components need not sum to the score.
    """
    if not breakdowns:
        return 0, HealthBreakdown()
    count = len(breakdowns)
    score = round_half_up(sum(b.total for b in breakdowns) / count)
    means = {
        name: round_half_up(sum(getattr(b, name) for b in breakdowns) / count)
        for name in _COMPONENTS
    }
    return score, HealthBreakdown(**means)


def node_warnings(
    *,
    has_title: bool,
    has_overview_section: bool,
    has_related_section: bool,
    word_count: int,
    in_degree: int,
    out_degree: int,
) -> List[ValidationWarning]:
    warnings: List[ValidationWarning] = []
    if not has_title:
        warnings.append(ValidationWarning(
            type=WarningType.MISSING_H1, message="Missing H1 title heading"))
    if not has_overview_section:
        warnings.append(ValidationWarning(
            type=WarningType.MISSING_OVERVIEW, message="Missing ## Overview section"))
    if out_degree == 0:
        warnings.append(ValidationWarning(
            type=WarningType.NO_OUTGOING_LINKS, message="No outgoing links to other docs"))
    if not has_related_section:
        warnings.append(ValidationWarning(
            type=WarningType.NO_RELATED_SECTION, message="Missing ## Related section"))
    if word_count < MIN_WORDS:
        warnings.append(ValidationWarning(
            type=WarningType.TOO_SHORT,
            message=f"Only {word_count} words (recommend {MIN_WORDS}+)"))
    if in_degree == 0 and out_degree == 0:
        warnings.append(ValidationWarning(
            type=WarningType.ORPHAN, message="Orphan node: no incoming or outgoing links"))
    return warnings
