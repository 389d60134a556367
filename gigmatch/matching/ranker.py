"""Filtering and ranking of jobs and freelancers by skill match."""
import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from gigmatch.matching.skill_matcher import DEFAULT_THRESHOLD, MatchResult, compute_match
from gigmatch.matching.skill_source import FreelancerRecord, HasSkills, JobRecord, skills_of

logger = logging.getLogger(__name__)


@dataclass
class ScoredItem:
    """A record paired with its match result."""

    item: HasSkills
    match_result: MatchResult

    @property
    def match_score(self) -> int:
        return self.match_result.score

    @property
    def matched_skills(self) -> list[str]:
        return self.match_result.matched_skills

    @property
    def unmatched_skills(self) -> list[str]:
        return self.match_result.unmatched_skills

    def to_dict(self) -> dict[str, Any]:
        """Shallow copy of the underlying record with the match fields merged in."""
        record = getattr(self.item, "record", None) or {}
        return {
            **record,
            "match_score": self.match_score,
            "matched_skills": list(self.matched_skills),
            "unmatched_skills": list(self.unmatched_skills),
        }


@dataclass
class ScoredJob(ScoredItem):
    """A job scored against one freelancer's skills."""

    item: JobRecord


@dataclass
class ScoredFreelancer(ScoredItem):
    """A freelancer scored against one job's required skills."""

    item: FreelancerRecord


def _rank(scored: list[ScoredItem], min_threshold: float) -> list:
    kept = [s for s in scored if s.match_score >= min_threshold]
    # list.sort is stable, so ties keep input order
    kept.sort(key=lambda s: s.match_score, reverse=True)
    return kept


def filter_matching_jobs(
    jobs: Optional[Sequence[JobRecord]],
    freelancer_skills: Optional[Sequence[str]],
    min_threshold: float = DEFAULT_THRESHOLD,
) -> list[ScoredJob]:
    """
    Score jobs against a freelancer's skills and keep those above threshold.

    The job's required skills are the reference set, so the score is the
    share of the job's requirements the freelancer covers.

    Args:
        jobs: Jobs to score
        freelancer_skills: The freelancer's skills
        min_threshold: Minimum score to keep (inclusive)

    Returns:
        ScoredJob list sorted by score descending
    """
    if not jobs or not freelancer_skills:
        return []

    scored = [
        ScoredJob(item=job, match_result=compute_match(skills_of(job), freelancer_skills))
        for job in jobs
    ]
    ranked = _rank(scored, min_threshold)

    logger.debug("Matched %d of %d jobs at threshold %s", len(ranked), len(jobs), min_threshold)
    return ranked


def find_matching_freelancers(
    freelancers: Optional[Sequence[FreelancerRecord]],
    job_skills: Optional[Sequence[str]],
    min_threshold: float = DEFAULT_THRESHOLD,
) -> list[ScoredFreelancer]:
    """
    Score freelancers against a job's required skills and keep those above threshold.

    Args:
        freelancers: Freelancers to score
        job_skills: The job's required skills
        min_threshold: Minimum score to keep (inclusive)

    Returns:
        ScoredFreelancer list sorted by score descending
    """
    if not freelancers or not job_skills:
        return []

    scored = [
        ScoredFreelancer(item=freelancer, match_result=compute_match(job_skills, skills_of(freelancer)))
        for freelancer in freelancers
    ]
    ranked = _rank(scored, min_threshold)

    logger.debug(
        "Matched %d of %d freelancers at threshold %s",
        len(ranked), len(freelancers), min_threshold,
    )
    return ranked
