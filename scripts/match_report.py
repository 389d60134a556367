#!/usr/bin/env python3
"""Print skill matches from a YAML catalog.

Usage:
    python scripts/match_report.py catalog.yaml --freelancer f1 [--min-score 60] [--page 1]
    python scripts/match_report.py catalog.yaml --job j1 [--notify]
    python scripts/match_report.py catalog.yaml --skills "React, Node.js"

With --notify, matching freelancers are notified about the job: the
notifications are stored in the database and relayed to the webhook when
NOTIFICATION_WEBHOOK_URL is set.
"""
import argparse
import asyncio
import logging
import sys

from scripts.bootstrap import get_session, init_db, settings
from gigmatch.catalog import Catalog, load_catalog
from gigmatch.logging_config import setup_logging
from gigmatch.matching.browse import browse_matched_jobs
from gigmatch.matching.ranker import find_matching_freelancers
from gigmatch.matching.skill_matcher import get_match_quality
from gigmatch.matching.skill_source import skills_of
from gigmatch.notifications.dispatcher import notify_matching_freelancers
from gigmatch.notifications.publisher import FanoutPublisher, StorePublisher, WebhookPublisher
from gigmatch.validators import BrowseParams, JobSkillsInput

logger = logging.getLogger(__name__)


def format_job_matches(catalog: Catalog, freelancer_id: str, params: BrowseParams) -> list[str]:
    """Report lines for the jobs matching one freelancer."""
    freelancer = catalog.find_freelancer(freelancer_id)
    if freelancer is None:
        raise KeyError(f"Unknown freelancer: {freelancer_id}")

    page = browse_matched_jobs(catalog.jobs, skills_of(freelancer), params)
    if page.message:
        return [page.message]

    lines = [
        f"{job.match_score:>3}%  {label:<15}  {job.item.title}  "
        f"[matched: {', '.join(job.matched_skills)}]"
        for job, label in zip(page.jobs, page.labels)
    ]
    p = page.pagination
    lines.append(f"Page {p.current_page}/{p.total_pages} ({p.total_jobs} matching jobs)")
    return lines


def format_freelancer_matches(catalog: Catalog, job_id: str, min_score: int) -> list[str]:
    """Report lines for the freelancers matching one job."""
    job = catalog.find_job(job_id)
    if job is None:
        raise KeyError(f"Unknown job: {job_id}")

    return _freelancer_lines(catalog, skills_of(job), min_score, job.title or job_id)


def format_skill_matches(catalog: Catalog, skills_text: str, min_score: int) -> list[str]:
    """Report lines for the freelancers matching a draft job's skill list."""
    skills = JobSkillsInput(skills_required=skills_text).skills_required
    return _freelancer_lines(catalog, skills, min_score, ", ".join(skills) or "no skills")


def _freelancer_lines(catalog: Catalog, job_skills: list[str], min_score: int, label: str) -> list[str]:
    matches = find_matching_freelancers(catalog.freelancers, job_skills, min_score)
    if not matches:
        return [f"No freelancers match {label} at {min_score}%"]

    return [
        f"{m.match_score:>3}%  {get_match_quality(m.match_score):<15}  {m.item.name}  "
        f"[missing: {', '.join(m.unmatched_skills) or '-'}]"
        for m in matches
    ]


async def notify_job(catalog: Catalog, job_id: str, min_score: int) -> int:
    """Store and relay notifications for one job. Returns the number sent."""
    job = catalog.find_job(job_id)
    if job is None:
        raise KeyError(f"Unknown job: {job_id}")

    init_db()
    with get_session() as session:
        publisher = FanoutPublisher(
            StorePublisher(session),
            WebhookPublisher(settings.notification_webhook_url),
        )
        payloads = await notify_matching_freelancers(job, catalog.freelancers, publisher, min_score)
    return len(payloads)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Print skill matches from a catalog")
    parser.add_argument("catalog", help="Path to catalog YAML")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--freelancer", help="Show jobs matching this freelancer")
    target.add_argument("--job", help="Show freelancers matching this job")
    target.add_argument("--skills", help="Show freelancers matching comma-separated job skills")
    parser.add_argument("--min-score", type=int, default=None, help="Minimum match score")
    parser.add_argument("--page", type=int, default=1, help="Page of matched jobs")
    parser.add_argument("--notify", action="store_true", help="Notify freelancers matching --job")
    args = parser.parse_args(argv)

    setup_logging()
    catalog = load_catalog(args.catalog)

    if args.freelancer:
        min_score = settings.match_threshold if args.min_score is None else args.min_score
        params = BrowseParams(min_score=min_score, page=args.page, limit=settings.page_size)
        lines = format_job_matches(catalog, args.freelancer, params)
    elif args.skills is not None:
        min_score = settings.notify_threshold if args.min_score is None else args.min_score
        lines = format_skill_matches(catalog, args.skills, min_score)
    else:
        min_score = settings.notify_threshold if args.min_score is None else args.min_score
        lines = format_freelancer_matches(catalog, args.job, min_score)
        if args.notify:
            sent = asyncio.run(notify_job(catalog, args.job, min_score))
            lines.append(f"Sent {sent} notifications")

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        sys.exit(1)
    except Exception as e:
        logger.error("Error: %s", e)
        sys.exit(1)
