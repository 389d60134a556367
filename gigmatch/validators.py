"""Pydantic validation models for values arriving from the request layer."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from gigmatch.matching.skill_matcher import DEFAULT_THRESHOLD


def clean_skill_list(v):
    """
    Coerce a submitted skill list into a list of trimmed names.

    ``None`` becomes an empty list and comma-separated text is split.
    Blank entries are dropped. Anything else is left for pydantic to reject.
    """
    if v is None:
        return []
    if isinstance(v, str):
        v = v.split(",")
    if isinstance(v, list):
        cleaned = []
        for item in v:
            if isinstance(item, str):
                item = item.strip()
                if not item:
                    continue
            elif item is None:
                continue
            cleaned.append(item)
        return cleaned
    return v


class BrowseParams(BaseModel):
    """Query parameters for browsing jobs matched to a freelancer."""
    min_score: int = Field(ge=0, le=100, default=DEFAULT_THRESHOLD)
    page: int = Field(ge=1, default=1)
    limit: int = Field(ge=1, le=100, default=10)


class JobSkillsInput(BaseModel):
    """Required skills as submitted with a new job."""
    skills_required: list[str] = Field(default_factory=list)

    @field_validator("skills_required", mode="before")
    @classmethod
    def split_and_strip(cls, v):
        """Accept comma-separated text and drop empty entries."""
        return clean_skill_list(v)


class CatalogJob(JobSkillsInput):
    """A job entry in a YAML catalog."""
    id: str
    title: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """YAML may load numeric ids as ints."""
        return str(v) if v is not None else v


class CatalogProfile(BaseModel):
    """A freelancer profile; keys other than skills pass through."""
    model_config = ConfigDict(extra="allow")

    skills: list[str] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def split_and_strip(cls, v):
        return clean_skill_list(v)


class CatalogFreelancer(BaseModel):
    """A freelancer entry in a YAML catalog."""
    id: str
    name: str = ""
    profile: Optional[CatalogProfile] = Field(default_factory=CatalogProfile)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """YAML may load numeric ids as ints."""
        return str(v) if v is not None else v
