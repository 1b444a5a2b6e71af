"""Tests for rejection-loop metrics."""

import gc

from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from variates.diagnostics import RejectionMetrics
from variates.sources import RandomSource
from variates.statistics import Beta, Uniform


def _points(reader: InMemoryMetricReader) -> dict[str, list]:
    points: dict[str, list] = {}
    data = reader.get_metrics_data()
    for resource_metrics in data.resource_metrics:
        for scope_metrics in resource_metrics.scope_metrics:
            for metric in scope_metrics.metrics:
                points[metric.name] = list(metric.data.data_points)
    return points


def test_record_reports_rejections_since_last_call() -> None:
    reader = InMemoryMetricReader()
    provider = MeterProvider(metric_readers=[reader])
    metrics = RejectionMetrics(provider.get_meter("test"))

    sampler = Beta(3.0, 4.0, source=RandomSource(6))
    sampler.sample(1000)
    delta = metrics.record(sampler, 1000)
    assert delta == sampler.rejection_count
    assert delta > 0
    assert metrics.record(sampler, 0) == 0

    points = _points(reader)
    assert sum(p.value for p in points["variates.draws"]) == 1000
    assert sum(p.value for p in points["variates.rejections"]) == delta
    assert points["variates.rejections"][0].attributes["distribution"] == "beta"
    provider.shutdown()


def test_inversion_samplers_never_reject() -> None:
    metrics = RejectionMetrics()
    sampler = Uniform(source=RandomSource(1))
    sampler.sample(100)
    assert metrics.record(sampler, 100) == 0


def test_released_samplers_are_forgotten() -> None:
    metrics = RejectionMetrics()
    sampler = Beta(2.0, 2.0, source=RandomSource(3))
    sampler.sample(200)
    metrics.record(sampler, 200)
    assert len(metrics._last_seen) == 1

    del sampler
    gc.collect()
    assert len(metrics._last_seen) == 0

    fresh = Beta(2.0, 2.0, source=RandomSource(4))
    fresh.sample(50)
    assert metrics.record(fresh, 50) == fresh.rejection_count
