"""Baseline removal, adaptive thresholds and beat counting for pulse samples."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ecgpulse.biquad import FilterCascade, butterworth_bandpass

AVERAGE_WINDOW_SIZE = 300
DEFAULT_AVERAGE = 30.0

DECAY_WINDOW = 0.00075
DECAY_THRESHOLD = 0.0005
UPPER_FRACTION = 0.75
LOWER_FRACTION = 0.40

SAMPLE_RATE_HZ = 1000
BPM_PERIOD_SECONDS = 10


class MovingAverage:
    """Circular moving average over a fixed window.

    The buffer starts filled with ``fill`` but the running total starts at zero,
    so the initial fill stays in the result as a constant bias of ``-fill``.
    """

    def __init__(self, size: int = AVERAGE_WINDOW_SIZE, fill: float = DEFAULT_AVERAGE) -> None:
        if size < 1:
            raise ValueError(f"window size must be positive, got {size}")
        self.size = size
        self._buffer: deque[float] = deque([float(fill)] * size, maxlen=size)
        self._total = 0.0

    def update(self, sample: float) -> float:
        """Replace the oldest sample with ``sample`` and return the new average."""
        self._total -= self._buffer[0]
        self._buffer.append(float(sample))
        self._total += sample
        return self._total / self.size


@dataclass
class ThresholdTracker:
    """Decaying signal window and hysteresis thresholds derived from it."""

    window_min: float = 0.0
    window_max: float = 0.0
    base_lower: float = 0.0
    base_upper: float = 0.0
    upper: float = 0.0
    lower: float = 0.0

    def update(self, sample: float) -> tuple[float, float]:
        """Track ``sample`` and return the new ``(lower, upper)`` thresholds."""
        if sample > self.window_max:
            self.window_max = sample
            self.base_upper = sample
        else:
            self.window_max += DECAY_WINDOW * (sample - self.window_max)
            self.base_upper += DECAY_THRESHOLD * (sample - self.base_upper)

        if sample < self.window_min:
            self.window_min = sample
            self.base_lower = sample
        else:
            self.window_min += DECAY_WINDOW * (sample - self.window_min)
            self.base_lower += DECAY_THRESHOLD * (sample - self.base_lower)

        width = self.base_upper - self.base_lower
        self.upper = self.base_lower + UPPER_FRACTION * width
        self.lower = self.base_lower + LOWER_FRACTION * width
        return self.lower, self.upper


class BeatDetector:
    """Normalises, filters and thresholds raw samples, counting beats."""

    def __init__(
        self,
        average: MovingAverage | None = None,
        cascade: FilterCascade | None = None,
        tracker: ThresholdTracker | None = None,
    ) -> None:
        self.average = average if average is not None else MovingAverage()
        self.cascade = cascade if cascade is not None else butterworth_bandpass()
        self.tracker = tracker if tracker is not None else ThresholdTracker()
        self.in_beat = False
        self.filtered = 0.0
        self._beat_count = 0
        self._lock = threading.Lock()

    @property
    def window_min(self) -> float:
        return self.tracker.window_min

    @property
    def window_max(self) -> float:
        return self.tracker.window_max

    def process(self, raw: float) -> float:
        """Process one raw reading and return the filtered value."""
        offset = raw - self.average.update(raw)
        self.filtered = -self.cascade.process(offset)
        self.tracker.update(self.filtered)
        if self.filtered > self.tracker.upper and not self.in_beat:
            with self._lock:
                self._beat_count += 1
            self.in_beat = True
        if self.filtered < self.tracker.lower and self.in_beat:
            self.in_beat = False
        return self.filtered

    def take_beat_count(self) -> int:
        """Return the beats counted since the last call and reset the count."""
        with self._lock:
            count, self._beat_count = self._beat_count, 0
        return count


def bpm_from_count(count: int, period_seconds: int = BPM_PERIOD_SECONDS) -> int:
    """Convert a beat count over ``period_seconds`` into whole beats per minute."""
    if period_seconds <= 0:
        raise ValueError(f"period must be positive, got {period_seconds}")
    if count < 0:
        raise ValueError(f"beat count cannot be negative, got {count}")
    return (count * 60) // period_seconds


@dataclass(frozen=True)
class Reading:
    """What the display receives after one sample."""

    value: float
    window_min: float
    window_max: float
    bpm: int
    updated: bool


class BpmMonitor:
    """Drives a detector at a fixed sample rate and refreshes the BPM each period."""

    def __init__(
        self,
        sample_rate: int = SAMPLE_RATE_HZ,
        period_seconds: int = BPM_PERIOD_SECONDS,
        detector: BeatDetector | None = None,
    ) -> None:
        if sample_rate <= 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate}")
        if period_seconds <= 0:
            raise ValueError(f"period must be positive, got {period_seconds}")
        self.sample_rate = sample_rate
        self.period_seconds = period_seconds
        self.samples_per_period = sample_rate * period_seconds
        self.detector = detector if detector is not None else BeatDetector()
        self.bpm = 0
        self._since_update = 0

    def feed(self, raw: float) -> Reading:
        """Process one raw sample and return the current reading."""
        value = self.detector.process(raw)
        self._since_update += 1
        updated = self._since_update >= self.samples_per_period
        if updated:
            self._since_update = 0
            self.bpm = bpm_from_count(self.detector.take_beat_count(), self.period_seconds)
        return Reading(value, self.detector.window_min, self.detector.window_max, self.bpm, updated)

    def run(self, samples: Iterable[float]) -> Iterator[Reading]:
        """Yield a reading for every sample."""
        for sample in samples:
            yield self.feed(sample)