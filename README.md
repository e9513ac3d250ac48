# ecgpulse

Heart-rate detection from a stream of raw ECG or pulse-sensor samples.
Pure Python, no dependencies outside the standard library.

## How a sample is processed

`BeatDetector.process(raw)` runs each reading through the same chain:

1. **Baseline removal** – `MovingAverage` keeps a circular window of 300
   samples and the running average is subtracted from the reading. The
   window starts filled with 30.0 while its running total starts at zero,
   so the average it returns is the window mean minus 30.0.
2. **Band-pass filtering** – a Butterworth filter made of three cascaded
   direct-form I biquad sections (`Biquad`, `FilterCascade`,
   `butterworth_bandpass()`), designed for 1 kHz samples. The detector uses
   the negated filter output.
3. **Adaptive thresholds** – `ThresholdTracker` follows a slowly decaying
   minimum and maximum of the filtered signal and sets an upper threshold at
   75 % and a lower threshold at 40 % of the band between them. It also
   keeps the signal window (`window_min`, `window_max`) used for display.
4. **Beat detection** – a beat is counted when the signal rises above the
   upper threshold while not already in a beat; the detector re-arms once
   the signal falls below the lower threshold. `take_beat_count()` returns
   the count so far and resets it (guarded by a lock).
5. **BPM** – `bpm_from_count(count, period_seconds)` scales a beat count
   over a period to whole beats per minute (`count * 60 // period`).

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Command line

```
ecgpulse [file] [--rate N] [--period N] [--trace] [--plot-every N]
```

Samples are read from `file`, or from standard input when it is `-` or
omitted. They are numbers separated by whitespace (any number per line);
`#` starts a comment that runs to the end of the line.

- `--rate` – samples per second (default 1000).
- `--period` – seconds per BPM update (default 10).
- `--trace` – after the input ends, print a text picture of the signal trace.
- `--plot-every` – with `--trace`, plot one point every N samples (default 10).

A line `BPM: <n>` is printed at the end of every period. A file that cannot
be read or a token that is not a number is reported on standard error and
the command exits with status 1.

```
ecgpulse samples.txt
ecgpulse --trace < samples.txt
```

## Library use

```python
from ecgpulse.detector import BeatDetector, bpm_from_count

detector = BeatDetector()
for raw in samples:          # e.g. 12-bit ADC readings taken at 1 kHz
    detector.process(raw)

beats = detector.take_beat_count()
print(bpm_from_count(beats, 10))
```

`BpmMonitor(sample_rate, period_seconds)` wraps the same steps:
`feed(raw)` processes one sample and returns a `Reading` with the filtered
`value`, `window_min`, `window_max`, the current `bpm` and `updated`
(true on the sample that completed a period). `run(samples)` yields a
`Reading` for every sample.

The filter on its own:

```python
from ecgpulse.biquad import butterworth_bandpass

cascade = butterworth_bandpass()
filtered = [cascade.process(x) for x in signal]
cascade.reset()
```

The trace display, a 128×32 pixel frame buffer:

```python
from ecgpulse.trace import TraceDisplay

display = TraceDisplay()
display.plot(value, window_min, window_max, bpm)
print(display.render())
```

`plot()` draws a line from the previous point to the next column, blanks
the 42×8 label area in the top-left corner and wraps (clearing the screen)
after the last column. `render()` returns a `BPM:<n>` line followed by one
line per pixel row, `#` for lit and `.` for dark pixels. `pixel(x, y)`
tells whether a pixel is lit, and `signal_to_row()` maps a value in the
signal window to a row; it raises `ValueError` when the window is empty.

## What it does not do

The package works on samples it is given: it does not read a sensor or an
ADC itself, and it does not drive a physical screen. The trace is only
kept in memory and shown as text.