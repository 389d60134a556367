"""Load jobs and freelancers from a YAML catalog file."""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

from gigmatch.matching.skill_source import FreelancerRecord, JobRecord
from gigmatch.validators import CatalogFreelancer, CatalogJob

logger = logging.getLogger(__name__)


@dataclass
class Catalog:
    """Jobs and freelancers available for matching."""

    jobs: list[JobRecord] = field(default_factory=list)
    freelancers: list[FreelancerRecord] = field(default_factory=list)

    def find_job(self, job_id: str) -> Optional[JobRecord]:
        return next((j for j in self.jobs if j.id == job_id), None)

    def find_freelancer(self, freelancer_id: str) -> Optional[FreelancerRecord]:
        return next((f for f in self.freelancers if f.id == freelancer_id), None)


def load_catalog(path: Union[str, Path]) -> Catalog:
    """
    Load a catalog of jobs and freelancers.

    Expected layout::

        jobs:
          - id: j1
            title: React dashboard
            skills_required: [React, Node.js]
        freelancers:
          - id: f1
            name: Ada
            profile:
              skills: [JavaScript, React]

    Args:
        path: Path to the YAML file

    Returns:
        Catalog with adapted records
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Catalog root must be a mapping: {path}")

    jobs = [JobRecord(CatalogJob(**entry).model_dump()) for entry in raw.get("jobs") or []]
    freelancers = [
        FreelancerRecord(CatalogFreelancer(**entry).model_dump())
        for entry in raw.get("freelancers") or []
    ]

    logger.info("Loaded %d jobs and %d freelancers from %s", len(jobs), len(freelancers), path)
    return Catalog(jobs=jobs, freelancers=freelancers)
