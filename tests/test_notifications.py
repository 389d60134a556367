"""Tests for notification templates, publishers, dispatch and storage."""
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from gigmatch.matching.skill_source import JobRecord
from gigmatch.notifications import templates
from gigmatch.notifications.dispatcher import notify, notify_matching_freelancers
from gigmatch.notifications.publisher import (
    FanoutPublisher,
    Publisher,
    StorePublisher,
    WebhookPublisher,
)
from gigmatch.notifications.store import NotificationStore
from gigmatch.notifications.templates import NotificationType
from gigmatch.persistence.models import Notification


class TestTemplates:
    """Tests for notification payload builders."""

    def test_proposal_received(self):
        payload = templates.proposal_received("c1", "Logo design", "Ada", "j1")

        assert payload.recipient_id == "c1"
        assert payload.type == NotificationType.PROPOSAL_RECEIVED
        assert payload.message == 'Ada submitted a proposal for "Logo design"'
        assert payload.link == "/job.html?id=j1"
        assert payload.data == {"job_id": "j1"}

    def test_proposal_outcomes(self):
        accepted = templates.proposal_accepted("f1", "Logo design", "j1")
        rejected = templates.proposal_rejected("f1", "Logo design", "j1")

        assert accepted.type == NotificationType.PROPOSAL_ACCEPTED
        assert accepted.color == "emerald"
        assert rejected.type == NotificationType.PROPOSAL_REJECTED
        assert rejected.message == 'Your proposal for "Logo design" was not accepted'

    def test_job_match_carries_score(self):
        payload = templates.job_match("f1", "API", "j1", match_score=67, matched_skills=("react",))

        assert payload.type == NotificationType.JOB_POSTED
        assert payload.title == "New Job Matches Your Skills"
        assert payload.data == {"job_id": "j1", "match_score": 67, "matched_skills": ["react"]}

    def test_job_match_without_score(self):
        assert templates.job_match("f1", "API", "j1").data == {"job_id": "j1"}

    def test_job_closed_and_profile_viewed(self):
        closed = templates.job_closed("f1", "API", "j1")
        viewed = templates.profile_viewed("u1", "Grace")

        assert closed.icon == "fas fa-lock"
        assert viewed.link == "/profile.html"
        assert viewed.data == {}

    def test_to_dict_uses_plain_type(self):
        body = templates.job_closed("f1", "API", "j1").to_dict()
        assert body["type"] == "job_closed"
        assert body["recipient_id"] == "f1"


class TestNotifyMatchingFreelancers:
    """Tests for job-posting fan-out."""

    @pytest.mark.asyncio
    async def test_notifies_matches_best_first(self, react_job, freelancer_factory, fake_publisher):
        freelancers = [
            freelancer_factory("partial", ["React"]),
            freelancer_factory("strong", ["react", "node.js", "JavaScript"]),
            freelancer_factory("none", ["Python"]),
        ]

        payloads = await notify_matching_freelancers(react_job, freelancers, fake_publisher, 50)

        assert [p.recipient_id for p in payloads] == ["strong"]
        assert payloads[0].data == {
            "job_id": "job-a",
            "match_score": 67,
            "matched_skills": ["react", "node.js"],
        }
        assert payloads[0].message == 'Check out: "React dashboard"'
        assert fake_publisher.batches == [payloads]

    @pytest.mark.asyncio
    async def test_threshold_is_inclusive(self, freelancer_factory, fake_publisher):
        job = JobRecord({"id": "j", "title": "T", "skills_required": ["Go", "Rust"]})
        payloads = await notify_matching_freelancers(
            job, [freelancer_factory("f", ["go"])], fake_publisher, 50
        )
        assert [p.data["match_score"] for p in payloads] == [50]

    @pytest.mark.asyncio
    async def test_job_without_skills_publishes_nothing(self, freelancer_factory, fake_publisher):
        job = JobRecord({"id": "j", "title": "T"})
        payloads = await notify_matching_freelancers(job, [freelancer_factory("f", ["Go"])], fake_publisher)

        assert payloads == []
        assert fake_publisher.batches == []

    @pytest.mark.asyncio
    async def test_no_matches_publishes_nothing(self, django_job, freelancer_factory, fake_publisher):
        payloads = await notify_matching_freelancers(
            django_job, [freelancer_factory("f", ["React"]), freelancer_factory("e", [])], fake_publisher
        )
        assert payloads == []
        assert fake_publisher.batches == []

    @pytest.mark.asyncio
    async def test_no_freelancers(self, react_job, fake_publisher):
        assert await notify_matching_freelancers(react_job, None, fake_publisher) == []

    @pytest.mark.asyncio
    async def test_notify_single(self, fake_publisher):
        assert await notify(templates.profile_viewed("u1", "Grace"), fake_publisher) is True
        assert fake_publisher.published[0].recipient_id == "u1"

    @pytest.mark.asyncio
    async def test_notify_single_undelivered(self, publisher_factory):
        publisher = publisher_factory(accept=False)
        assert await notify(templates.profile_viewed("u1", "Grace"), publisher) is False


class TestNotificationStore:
    """Tests for NotificationStore."""

    def _seed(self, test_db):
        store = NotificationStore(test_db)
        rows = store.save_many([
            templates.job_closed("f1", "A", "j1"),
            templates.job_closed("f1", "B", "j2"),
            templates.profile_viewed("f2", "Ada"),
        ])
        return store, rows

    def test_save_many(self, test_db):
        store, rows = self._seed(test_db)

        assert len(rows) == 3
        saved = test_db.get(Notification, rows[0].id)
        assert saved.type == "job_closed"
        assert saved.read is False
        assert saved.data == {"job_id": "j1"}
        assert saved.created_at is not None

    def test_save_empty_batch(self, test_db):
        assert NotificationStore(test_db).save_many([]) == []

    def test_list_newest_first(self, test_db):
        store, rows = self._seed(test_db)
        rows[0].created_at = datetime(2026, 1, 1)
        rows[1].created_at = datetime(2026, 1, 1) + timedelta(hours=1)
        test_db.commit()

        listed = store.list_for_recipient("f1")
        assert [n.id for n in listed] == [rows[1].id, rows[0].id]

    def test_list_limit_and_skip(self, test_db):
        store, _ = self._seed(test_db)
        assert len(store.list_for_recipient("f1", limit=1)) == 1
        assert len(store.list_for_recipient("f1", skip=1)) == 1
        assert store.list_for_recipient("f1", skip=2) == []

    def test_counts(self, test_db):
        store, rows = self._seed(test_db)
        store.mark_as_read(rows[0].id, "f1")

        assert store.count_for_recipient("f1") == 2
        assert store.unread_count("f1") == 1
        assert store.unread_count("f2") == 1
        assert [n.id for n in store.list_for_recipient("f1", unread_only=True)] == [rows[1].id]

    def test_mark_as_read(self, test_db):
        store, rows = self._seed(test_db)

        updated = store.mark_as_read(rows[0].id, "f1")

        assert updated.read is True
        assert updated.read_at is not None

    def test_mark_as_read_wrong_recipient(self, test_db):
        """One user cannot change another user's notification."""
        store, rows = self._seed(test_db)

        assert store.mark_as_read(rows[0].id, "f2") is None
        assert test_db.get(Notification, rows[0].id).read is False

    def test_mark_all_as_read(self, test_db):
        store, _ = self._seed(test_db)

        assert store.mark_all_as_read("f1") == 2
        assert store.unread_count("f1") == 0
        assert store.unread_count("f2") == 1
        assert store.mark_all_as_read("f1") == 0

    def test_delete(self, test_db):
        store, rows = self._seed(test_db)
        target_id = rows[0].id

        assert store.delete(target_id, "f2") is False
        assert store.delete(target_id, "f1") is True
        assert store.count_for_recipient("f1") == 1
        assert store.delete(target_id, "f1") is False

    def test_clear_read(self, test_db):
        store, rows = self._seed(test_db)
        store.mark_as_read(rows[0].id, "f1")
        store.mark_all_as_read("f2")

        assert store.clear_read("f1") == 1
        assert store.count_for_recipient("f1") == 1
        assert store.count_for_recipient("f2") == 1


class TestPublishers:
    """Tests for publisher implementations."""

    def test_implementations_satisfy_protocol(self, test_db, fake_publisher):
        assert isinstance(WebhookPublisher(), Publisher)
        assert isinstance(StorePublisher(test_db), Publisher)
        assert isinstance(FanoutPublisher(fake_publisher), Publisher)

    @pytest.mark.asyncio
    async def test_store_publisher(self, test_db):
        publisher = StorePublisher(test_db)
        delivered = await publisher.publish([templates.job_closed("f1", "A", "j1")])

        assert delivered == 1
        assert NotificationStore(test_db).unread_count("f1") == 1

    @pytest.mark.asyncio
    async def test_store_publisher_commits_on_caller_session(self, test_db):
        """Rows are committed on the caller's session before publish returns."""
        await StorePublisher(test_db).publish([templates.job_closed("f1", "A", "j1")])
        test_db.rollback()

        assert NotificationStore(test_db).unread_count("f1") == 1

    @pytest.mark.asyncio
    async def test_webhook_not_configured(self):
        publisher = WebhookPublisher(webhook_url=None)
        assert await publisher.publish([templates.job_closed("f1", "A", "j1")]) == 0

    @pytest.mark.asyncio
    async def test_webhook_posts_each_payload(self):
        response = AsyncMock()
        response.status = 200
        session = MagicMock()
        session.post = MagicMock(return_value=_async_context(response))

        with patch(
            "gigmatch.notifications.publisher.aiohttp.ClientSession",
            return_value=_async_context(session),
        ):
            publisher = WebhookPublisher("https://relay.example.com/notify")
            delivered = await publisher.publish([
                templates.job_closed("f1", "A", "j1"),
                templates.job_closed("f2", "A", "j1"),
            ])

        assert delivered == 2
        assert session.post.call_count == 2
        first_body = session.post.call_args_list[0].kwargs["json"]
        assert first_body["room"] == "f1"
        assert first_body["notification"]["type"] == "job_closed"

    @pytest.mark.asyncio
    async def test_webhook_counts_failures(self):
        ok = AsyncMock()
        ok.status = 200
        rejected = AsyncMock()
        rejected.status = 500

        calls = []

        def side_effect(*args, **kwargs):
            calls.append(kwargs)
            if len(calls) == 1:
                return _async_context(rejected)
            if len(calls) == 2:
                raise aiohttp.ClientConnectionError("connection refused")
            return _async_context(ok)

        session = MagicMock()
        session.post = MagicMock(side_effect=side_effect)

        with patch(
            "gigmatch.notifications.publisher.aiohttp.ClientSession",
            return_value=_async_context(session),
        ):
            publisher = WebhookPublisher("https://relay.example.com/notify")
            delivered = await publisher.publish([
                templates.job_closed(f"f{i}", "A", "j1") for i in range(3)
            ])

        assert delivered == 1
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_fanout_returns_primary_count(self, fake_publisher, publisher_factory):
        secondary = publisher_factory(accept=False)
        publisher = FanoutPublisher(fake_publisher, secondary)
        payloads = [templates.job_closed("f1", "A", "j1")]

        assert await publisher.publish(payloads) == 1
        assert secondary.published == payloads

    def test_fanout_requires_publisher(self):
        with pytest.raises(ValueError):
            FanoutPublisher()


# =============================================================================
# Helpers
# =============================================================================


class _async_context:
    """Helper to create an async context manager from a mock."""

    def __init__(self, value):
        self.value = value

    async def __aenter__(self):
        return self.value

    async def __aexit__(self, *args):
        pass
