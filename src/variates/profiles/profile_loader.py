"""
Load YAML sampler profiles.

A profile names a set of fields, each backed by one sampler configuration, and
is used to produce rows of synthetic numeric data:

    name: checkout_latency
    description: Latency and basket size for checkout requests
    seed: 42
    count: 20
    fields:
      latency_ms: {distribution: log_normal, mean: 180, variance: 3600}
      items: {distribution: poisson, mean: 3}

Every field gets its own sampler and its own source. With a profile seed,
field i is seeded with seed + i, so runs are reproducible field by field.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..config import DEFAULT_COUNT, PROFILES_DIR
from ..sources.uniform_source import RandomSource
from ..statistics.base import Sampler
from ..statistics.factory import DistributionFactory

logger = logging.getLogger(__name__)


@dataclass
class Profile:
    """A named group of field samplers."""

    name: str
    description: str = ""
    seed: int | None = None
    count: int = DEFAULT_COUNT
    fields: dict[str, dict[str, Any]] = field(default_factory=dict)

    def build_samplers(self) -> dict[str, Sampler]:
        """Create one independent sampler per field."""
        samplers: dict[str, Sampler] = {}
        for index, (field_name, config) in enumerate(self.fields.items()):
            seed = None if self.seed is None else self.seed + index
            cfg = {k: v for k, v in config.items() if k != "seed"}
            samplers[field_name] = DistributionFactory.create(cfg, source=RandomSource(seed))
        return samplers

    def records(self, count: int | None = None) -> Iterator[dict[str, float]]:
        """Yield count rows (profile count when None), one value per field."""
        samplers = self.build_samplers()
        total = self.count if count is None else count
        for _ in range(total):
            yield {name: sampler.next() for name, sampler in samplers.items()}

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_name: str = "") -> "Profile":
        """Create Profile from YAML data."""
        data = data if isinstance(data, dict) else {}
        name = str(data.get("name") or default_name)
        fields = data.get("fields") or {}
        if not isinstance(fields, dict):
            raise ValueError(f"Profile {name!r}: 'fields' must be a mapping")
        for field_name, config in fields.items():
            if not isinstance(config, dict) or "distribution" not in config:
                raise ValueError(
                    f"Profile {name!r}: field {field_name!r} needs a 'distribution' entry"
                )

        seed = data.get("seed")
        count = data.get("count", DEFAULT_COUNT)
        if not isinstance(count, int) or count < 0:
            raise ValueError(f"Profile {name!r}: 'count' must be a non-negative integer")

        return cls(
            name=name,
            description=str(data.get("description", "")),
            seed=None if seed is None else int(seed),
            count=count,
            fields={str(k): dict(v) for k, v in fields.items()},
        )


class ProfileLoader:
    """Load profiles from YAML files."""

    def __init__(self, profiles_dir: Path | str | None = None):
        """Initialize loader; None uses the bundled resource/profiles directory."""
        if profiles_dir is None:
            self.profiles_dir = PROFILES_DIR
        else:
            self.profiles_dir = Path(profiles_dir)

    def load(self, profile_name: str) -> Profile:
        """Load a profile by name (file stem)."""
        profile_file = self.profiles_dir / f"{profile_name}.yaml"
        if not profile_file.exists():
            raise FileNotFoundError(f"Profile not found: {profile_name}")
        logger.debug("Loading profile %s from %s", profile_name, profile_file)
        with open(profile_file, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return Profile.from_dict(data, default_name=profile_name)

    def load_all(self) -> list[Profile]:
        """Load every profile in the directory, sorted by file name."""
        if not self.profiles_dir.exists():
            return []
        return [self.load(name) for name in self.list_profiles()]

    def list_profiles(self) -> list[str]:
        """List available profile names."""
        if not self.profiles_dir.exists():
            return []
        return sorted(f.stem for f in self.profiles_dir.glob("*.yaml"))
