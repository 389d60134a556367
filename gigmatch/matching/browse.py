"""Paginated, labelled view of jobs matched to a freelancer."""
import math
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from gigmatch.matching.ranker import ScoredJob, filter_matching_jobs
from gigmatch.matching.skill_matcher import get_match_quality
from gigmatch.matching.skill_source import JobRecord
from gigmatch.validators import BrowseParams

NO_SKILLS_MESSAGE = "Please add skills to your profile to see matched jobs"


@dataclass
class Pagination:
    """Page position within a matched job list."""

    current_page: int = 1
    total_pages: int = 0
    total_jobs: int = 0
    has_next: bool = False
    has_prev: bool = False


@dataclass
class MatchedJobsPage:
    """One page of matched jobs, each with its quality label."""

    jobs: list[ScoredJob] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    pagination: Pagination = field(default_factory=Pagination)
    message: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Render as a response body."""
        body: dict[str, Any] = {
            "jobs": [
                {**job.to_dict(), "match_quality": label}
                for job, label in zip(self.jobs, self.labels)
            ],
            "pagination": vars(self.pagination).copy(),
        }
        if self.message:
            body["message"] = self.message
        return body


def browse_matched_jobs(
    jobs: Optional[Sequence[JobRecord]],
    freelancer_skills: Optional[Sequence[str]],
    params: Optional[BrowseParams] = None,
) -> MatchedJobsPage:
    """
    Match open jobs against a freelancer's skills and return one labelled page.

    Args:
        jobs: Candidate jobs, typically all open jobs newest first
        freelancer_skills: The freelancer's skills
        params: Validated threshold and pagination parameters

    Returns:
        MatchedJobsPage for the requested page
    """
    params = params or BrowseParams()

    if not freelancer_skills:
        return MatchedJobsPage(message=NO_SKILLS_MESSAGE)

    matched = filter_matching_jobs(jobs, freelancer_skills, params.min_score)

    start = (params.page - 1) * params.limit
    page_jobs = matched[start:start + params.limit]
    total_pages = math.ceil(len(matched) / params.limit)

    return MatchedJobsPage(
        jobs=page_jobs,
        labels=[get_match_quality(job.match_score) for job in page_jobs],
        pagination=Pagination(
            current_page=params.page,
            total_pages=total_pages,
            total_jobs=len(matched),
            has_next=params.page < total_pages,
            has_prev=params.page > 1,
        ),
    )
