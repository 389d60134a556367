"""Skill source protocol and adapters for job and freelancer records.

The matcher never reaches into storage records directly. Callers wrap
their rows or documents in an adapter that implements HasSkills, so the
place a skill list lives (``skills_required`` on a job, ``profile.skills``
on a user) is decided once, here.
"""
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class HasSkills(Protocol):
    """Anything that can report a skill list."""

    def get_skills(self) -> Optional[Sequence[str]]:
        """Return the skill list, or None when the record has none."""
        ...


def skills_of(item: HasSkills) -> list[str]:
    """Return the skills of an item, treating a missing list as empty."""
    return list(item.get_skills() or [])


def _record_id(record: Mapping[str, Any]) -> Optional[str]:
    value = record.get("id", record.get("_id"))
    return str(value) if value is not None else None


@dataclass
class JobRecord:
    """Adapter for a job mapping carrying required skills."""

    record: Mapping[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> Optional[str]:
        return _record_id(self.record)

    @property
    def title(self) -> str:
        return self.record.get("title") or ""

    def get_skills(self) -> Optional[Sequence[str]]:
        if "skills_required" in self.record:
            return self.record.get("skills_required")
        return self.record.get("skillsRequired")


@dataclass
class FreelancerRecord:
    """Adapter for a user mapping with skills under ``profile.skills``."""

    record: Mapping[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> Optional[str]:
        return _record_id(self.record)

    @property
    def name(self) -> str:
        return self.record.get("name") or ""

    def get_skills(self) -> Optional[Sequence[str]]:
        profile = self.record.get("profile") or {}
        return profile.get("skills")
