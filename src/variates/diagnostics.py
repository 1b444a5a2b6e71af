"""
Rejection-loop instrumentation via OpenTelemetry metrics.

Samplers only count rejected candidates; this module turns those counts into
metric points. It uses the global meter provider, so recording is a no-op
until the application installs an SDK MeterProvider (the CLI does that for
--metrics).
"""

import weakref

from opentelemetry import metrics
from opentelemetry.metrics import Meter

from .statistics.base import Sampler


class RejectionMetrics:
    """Publish draw and rejection counts of samplers."""

    def __init__(self, meter: Meter | None = None):
        self.meter = meter or metrics.get_meter(__name__)
        self._last_seen: weakref.WeakKeyDictionary[Sampler, int] = weakref.WeakKeyDictionary()
        self._setup_instruments()

    def _setup_instruments(self):
        self.draw_count = self.meter.create_counter(
            "variates.draws",
            description="Count of values drawn from samplers",
            unit="1",
        )

        self.rejection_count = self.meter.create_counter(
            "variates.rejections",
            description="Candidates discarded by rejection loops",
            unit="1",
        )

        self.rejection_ratio = self.meter.create_histogram(
            "variates.rejections_per_draw",
            description="Rejected candidates per accepted value, per recorded batch",
            unit="1",
        )

    def record(self, sampler: Sampler, drawn: int) -> int:
        """
        Record a batch of draws from sampler.

        Returns the number of rejections since the previous record() for the
        same sampler instance.
        """
        attrs = {"distribution": sampler.name}
        total = sampler.rejection_count
        delta = total - self._last_seen.get(sampler, 0)
        self._last_seen[sampler] = total

        self.draw_count.add(drawn, attrs)
        self.rejection_count.add(delta, attrs)
        if drawn > 0:
            self.rejection_ratio.record(delta / drawn, attrs)
        return delta
