"""Heart-rate detection from raw ECG samples: filtering, adaptive thresholds, BPM and a text trace."""

__version__ = "0.1.0"

__all__ = ["biquad", "detector", "trace", "cli"]