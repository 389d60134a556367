"""Skill matching and ranking."""
from .ranker import ScoredFreelancer, ScoredJob, filter_matching_jobs, find_matching_freelancers
from .skill_matcher import MatchResult, compute_match, get_match_quality, is_match, normalize_skill
from .skill_source import FreelancerRecord, HasSkills, JobRecord, skills_of

__all__ = [
    "MatchResult",
    "compute_match",
    "is_match",
    "get_match_quality",
    "normalize_skill",
    "HasSkills",
    "JobRecord",
    "FreelancerRecord",
    "skills_of",
    "ScoredJob",
    "ScoredFreelancer",
    "filter_matching_jobs",
    "find_matching_freelancers",
]
