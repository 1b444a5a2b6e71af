"""Tests for YAML profile loading and row generation."""

from pathlib import Path

import pytest

from variates.config import PROFILES_DIR
from variates.profiles import Profile, ProfileLoader

CUSTOM_PROFILE = """
name: custom
description: Two fields
seed: 5
count: 4
fields:
  wait:
    distribution: exponential
    rate: 2
  size:
    distribution: binomial
    trials: 10
    probability: 0.5
"""


def test_bundled_profiles_dir_exists() -> None:
    assert PROFILES_DIR.is_dir()


def test_loader_lists_bundled_profiles() -> None:
    names = ProfileLoader().list_profiles()
    assert "checkout_latency" in names
    assert names == sorted(names)


def test_load_bundled_profile() -> None:
    profile = ProfileLoader().load("checkout_latency")
    assert profile.name == "checkout_latency"
    assert profile.seed == 42
    assert set(profile.fields) == {"latency_ms", "items", "retries"}


def test_records_have_one_value_per_field() -> None:
    profile = ProfileLoader().load("checkout_latency")
    rows = list(profile.records())
    assert len(rows) == profile.count
    for row in rows:
        assert set(row) == {"latency_ms", "items", "retries"}
        assert row["latency_ms"] > 0
        assert row["retries"] >= 1


def test_seeded_profile_is_reproducible() -> None:
    loader = ProfileLoader()
    first = list(loader.load("sensor_noise").records(25))
    second = list(loader.load("sensor_noise").records(25))
    assert first == second


def test_fields_use_independent_sources() -> None:
    samplers = ProfileLoader().load("checkout_latency").build_samplers()
    sources = [s.source for s in samplers.values()]
    assert len({id(s) for s in sources}) == len(sources)


def test_load_all_parses_every_file() -> None:
    profiles = ProfileLoader().load_all()
    assert {p.name for p in profiles} >= {"checkout_latency", "sensor_noise", "batch_jobs"}


def test_custom_profiles_dir(tmp_path: Path) -> None:
    (tmp_path / "custom.yaml").write_text(CUSTOM_PROFILE, encoding="utf-8")
    loader = ProfileLoader(tmp_path)
    assert loader.list_profiles() == ["custom"]
    rows = list(loader.load("custom").records())
    assert len(rows) == 4
    assert all(0 <= row["size"] <= 10 for row in rows)


def test_missing_profile_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ProfileLoader(tmp_path).load("nope")
    assert ProfileLoader(tmp_path / "missing").list_profiles() == []


def test_field_without_distribution_is_rejected() -> None:
    with pytest.raises(ValueError, match="distribution"):
        Profile.from_dict({"name": "bad", "fields": {"x": {"mean": 1}}})


def test_negative_count_is_rejected() -> None:
    with pytest.raises(ValueError, match="count"):
        Profile.from_dict({"name": "bad", "count": -3, "fields": {}})
