"""Skill matching between freelancers and job requirements."""
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

DEFAULT_THRESHOLD = 50

# Evaluated top-down, first floor that the score reaches wins
QUALITY_BANDS = [
    (90, "Excellent Match"),
    (75, "Great Match"),
    (60, "Good Match"),
    (50, "Fair Match"),
]
POOR_MATCH = "Poor Match"


@dataclass(frozen=True)
class MatchResult:
    """Result of comparing a candidate skill set against a reference set."""

    score: int  # 0-100
    matched_skills: list[str] = field(default_factory=list)
    unmatched_skills: list[str] = field(default_factory=list)
    total_reference_skills: int = 0
    matched_count: int = 0


def normalize_skill(skill: str) -> str:
    """Lowercase and trim a skill for comparison."""
    return skill.strip().lower()


def _round_half_up(value: float) -> int:
    # round() is half-to-even; 12.5 must become 13
    return int(math.floor(value + 0.5))


def compute_match(
    reference_skills: Optional[Sequence[str]],
    candidate_skills: Optional[Sequence[str]],
) -> MatchResult:
    """
    Score how much of a reference skill set a candidate covers.

    The reference is the set being satisfied (a job's required skills);
    the candidate is the set offered (a freelancer's skills). Duplicates
    in the reference are counted, duplicates in the candidate are not.

    Args:
        reference_skills: Skills that should be covered, may be None
        candidate_skills: Skills on offer, may be None

    Returns:
        MatchResult with a 0-100 score and normalized matched/unmatched skills
    """
    reference = list(reference_skills or [])
    candidate = list(candidate_skills or [])

    if not reference or not candidate:
        return MatchResult(
            score=0,
            matched_skills=[],
            unmatched_skills=reference,
            total_reference_skills=len(reference),
            matched_count=0,
        )

    offered = {normalize_skill(s) for s in candidate}
    normalized_reference = [normalize_skill(s) for s in reference]

    matched = [s for s in normalized_reference if s in offered]
    unmatched = [s for s in normalized_reference if s not in offered]

    return MatchResult(
        score=_round_half_up(len(matched) / len(normalized_reference) * 100),
        matched_skills=matched,
        unmatched_skills=unmatched,
        total_reference_skills=len(reference),
        matched_count=len(matched),
    )


def is_match(
    reference_skills: Optional[Sequence[str]],
    candidate_skills: Optional[Sequence[str]],
    min_threshold: float = DEFAULT_THRESHOLD,
) -> bool:
    """Check whether the match score reaches the threshold (inclusive)."""
    return compute_match(reference_skills, candidate_skills).score >= min_threshold


def get_match_quality(score: float) -> str:
    """Map a match score to its display label."""
    for floor, label in QUALITY_BANDS:
        if score >= floor:
            return label
    return POOR_MATCH
