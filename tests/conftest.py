"""Pytest fixtures for Gig Match tests."""
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gigmatch.matching.skill_source import FreelancerRecord, JobRecord
from gigmatch.notifications.templates import NotificationPayload
from gigmatch.persistence.models import Base


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


# =============================================================================
# MATCHING FIXTURES
# =============================================================================


@pytest.fixture
def freelancer_skills():
    """Skills of the freelancer used across end-to-end scenarios."""
    return ["JavaScript", "React", "Node.js"]


@pytest.fixture
def react_job():
    """Job covered two thirds by freelancer_skills."""
    return JobRecord({
        "id": "job-a",
        "title": "React dashboard",
        "skills_required": ["React", "Vue", "Node.js"],
    })


@pytest.fixture
def django_job():
    """Job freelancer_skills do not cover at all."""
    return JobRecord({
        "id": "job-b",
        "title": "Django API",
        "skills_required": ["Python", "Django"],
    })


@pytest.fixture
def freelancer_factory():
    """
    Factory fixture to build freelancer records.

    Usage:
        ada = freelancer_factory("f1", ["Python", "Django"])
    """

    def _create(freelancer_id: str, skills, name: str = ""):
        profile = {"skills": skills} if skills is not None else {}
        return FreelancerRecord({
            "id": freelancer_id,
            "name": name or freelancer_id,
            "profile": profile,
        })

    return _create


# =============================================================================
# NOTIFICATION FIXTURES
# =============================================================================


class FakePublisher:
    """Publisher that records every batch it receives."""

    def __init__(self, accept: bool = True):
        self.accept = accept
        self.batches: list[list[NotificationPayload]] = []

    async def publish(self, payloads):
        self.batches.append(list(payloads))
        return len(payloads) if self.accept else 0

    @property
    def published(self) -> list[NotificationPayload]:
        return [p for batch in self.batches for p in batch]


@pytest.fixture
def fake_publisher():
    """Publisher that captures payloads instead of delivering them."""
    return FakePublisher()


@pytest.fixture
def publisher_factory():
    """Build fake publishers, e.g. one that reports nothing delivered."""
    return FakePublisher


# =============================================================================
# TEMPORARY FILE FIXTURES
# =============================================================================


@pytest.fixture
def catalog_file(tmp_path):
    """Write a small YAML catalog and return its path."""
    path = tmp_path / "catalog.yaml"
    path.write_text(
        """
jobs:
  - id: j1
    title: React dashboard
    skills_required: [React, Vue, Node.js]
  - id: j2
    title: Django API
    skills_required: [Python, Django]
  - id: 3
    title: Static site
freelancers:
  - id: f1
    name: Ada
    profile:
      skills: [JavaScript, React, Node.js]
  - id: f2
    name: Grace
    profile:
      skills: [python, " DJANGO "]
  - id: f3
    name: Linus
"""
    )
    return path
