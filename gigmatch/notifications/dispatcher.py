"""Fan-out of job notifications to matching freelancers."""
import logging
from typing import Optional, Sequence

from gigmatch.matching.ranker import find_matching_freelancers
from gigmatch.matching.skill_matcher import DEFAULT_THRESHOLD
from gigmatch.matching.skill_source import FreelancerRecord, JobRecord, skills_of
from gigmatch.notifications import templates
from gigmatch.notifications.publisher import Publisher
from gigmatch.notifications.templates import NotificationPayload

logger = logging.getLogger(__name__)


async def notify_matching_freelancers(
    job: JobRecord,
    freelancers: Optional[Sequence[FreelancerRecord]],
    publisher: Publisher,
    min_threshold: float = DEFAULT_THRESHOLD,
) -> list[NotificationPayload]:
    """
    Tell every freelancer whose skills cover enough of a new job about it.

    Args:
        job: The newly posted job
        freelancers: Candidate freelancers
        publisher: Channel that stores and/or delivers the notifications
        min_threshold: Minimum match score to notify (inclusive)

    Returns:
        The payloads handed to the publisher, best match first
    """
    job_skills = skills_of(job)
    if not job_skills:
        return []

    candidates = [f for f in freelancers or [] if skills_of(f)]
    matches = find_matching_freelancers(candidates, job_skills, min_threshold)
    if not matches:
        logger.info("No freelancers matched job %s", job.id)
        return []

    payloads = [
        templates.job_match(
            freelancer_id=match.item.id,
            job_title=job.title,
            job_id=job.id,
            match_score=match.match_score,
            matched_skills=match.matched_skills,
        )
        for match in matches
    ]

    delivered = await publisher.publish(payloads)
    logger.info(
        "Job %s matched %d of %d freelancers, %d notifications delivered",
        job.id, len(matches), len(candidates), delivered,
    )
    return payloads


async def notify(payload: NotificationPayload, publisher: Publisher) -> bool:
    """Publish a single notification."""
    return await publisher.publish([payload]) == 1
