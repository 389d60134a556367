"""Notification payloads for each kind of board event."""
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence


class NotificationType(str, Enum):
    """Kinds of notification a user can receive."""

    PROPOSAL_RECEIVED = "proposal_received"
    PROPOSAL_ACCEPTED = "proposal_accepted"
    PROPOSAL_REJECTED = "proposal_rejected"
    JOB_POSTED = "job_posted"
    JOB_UPDATED = "job_updated"
    JOB_CLOSED = "job_closed"
    MESSAGE_RECEIVED = "message_received"
    PAYMENT_RECEIVED = "payment_received"
    PROFILE_VIEWED = "profile_viewed"


@dataclass
class NotificationPayload:
    """A notification addressed to one recipient, not yet stored or sent."""

    recipient_id: str
    type: NotificationType
    title: str
    message: str
    icon: str = "fas fa-bell"
    color: str = "blue"
    link: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        body = asdict(self)
        body["type"] = self.type.value
        return body


def _job_link(job_id: str) -> str:
    return f"/job.html?id={job_id}"


def proposal_received(
    client_id: str, job_title: str, freelancer_name: str, job_id: str
) -> NotificationPayload:
    return NotificationPayload(
        recipient_id=client_id,
        type=NotificationType.PROPOSAL_RECEIVED,
        title="New Proposal Received",
        message=f'{freelancer_name} submitted a proposal for "{job_title}"',
        icon="fas fa-file-alt",
        color="blue",
        link=_job_link(job_id),
        data={"job_id": job_id},
    )


def proposal_accepted(freelancer_id: str, job_title: str, job_id: str) -> NotificationPayload:
    return NotificationPayload(
        recipient_id=freelancer_id,
        type=NotificationType.PROPOSAL_ACCEPTED,
        title="Proposal Accepted!",
        message=f'Your proposal for "{job_title}" has been accepted!',
        icon="fas fa-check-circle",
        color="emerald",
        link=_job_link(job_id),
        data={"job_id": job_id},
    )


def proposal_rejected(freelancer_id: str, job_title: str, job_id: str) -> NotificationPayload:
    return NotificationPayload(
        recipient_id=freelancer_id,
        type=NotificationType.PROPOSAL_REJECTED,
        title="Proposal Not Accepted",
        message=f'Your proposal for "{job_title}" was not accepted',
        icon="fas fa-times-circle",
        color="red",
        link=_job_link(job_id),
        data={"job_id": job_id},
    )


def job_match(
    freelancer_id: str,
    job_title: str,
    job_id: str,
    match_score: Optional[int] = None,
    matched_skills: Optional[Sequence[str]] = None,
) -> NotificationPayload:
    """New job whose requirements match the freelancer's skills."""
    data: dict[str, Any] = {"job_id": job_id}
    if match_score is not None:
        data["match_score"] = match_score
    if matched_skills is not None:
        data["matched_skills"] = list(matched_skills)

    return NotificationPayload(
        recipient_id=freelancer_id,
        type=NotificationType.JOB_POSTED,
        title="New Job Matches Your Skills",
        message=f'Check out: "{job_title}"',
        icon="fas fa-briefcase",
        color="emerald",
        link=_job_link(job_id),
        data=data,
    )


def job_closed(freelancer_id: str, job_title: str, job_id: str) -> NotificationPayload:
    return NotificationPayload(
        recipient_id=freelancer_id,
        type=NotificationType.JOB_CLOSED,
        title="Job Closed",
        message=f'The job "{job_title}" has been closed',
        icon="fas fa-lock",
        color="gray",
        link=_job_link(job_id),
        data={"job_id": job_id},
    )


def profile_viewed(user_id: str, viewer_name: str) -> NotificationPayload:
    return NotificationPayload(
        recipient_id=user_id,
        type=NotificationType.PROFILE_VIEWED,
        title="Profile Viewed",
        message=f"{viewer_name} viewed your profile",
        icon="fas fa-eye",
        color="purple",
        link="/profile.html",
    )
