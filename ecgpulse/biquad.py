"""Second-order IIR sections and the band-pass cascade used for pulse signals."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

BUTTERWORTH_SECTIONS: tuple[tuple[tuple[float, float, float], tuple[float, float]], ...] = (
    ((2.23775228e-06, 4.47550457e-06, 2.23775228e-06), (-1.97693169, 0.977817352)),
    ((1.0, 0.0, -1.0), (-1.97379693, 0.973952795)),
    ((1.0, -2.0, 1.0), (-1.99602456, 0.996052349)),
)


class Biquad:
    """Direct-form I biquad: y = b0*x0 + b1*x1 + b2*x2 - a1*y1 - a2*y2."""

    def __init__(self, b: Sequence[float], a: Sequence[float]) -> None:
        b = tuple(float(c) for c in b)
        a = tuple(float(c) for c in a)
        if len(b) != 3:
            raise ValueError(f"a biquad needs 3 feed-forward coefficients, got {len(b)}")
        if len(a) != 2:
            raise ValueError(f"a biquad needs 2 feedback coefficients, got {len(a)}")
        self.b = b
        self.a = a
        self._x = [0.0, 0.0, 0.0]
        self._y = [0.0, 0.0]

    @property
    def inputs(self) -> tuple[float, ...]:
        """The stored inputs, newest first."""
        return tuple(self._x)

    @property
    def outputs(self) -> tuple[float, ...]:
        """The stored outputs, newest first."""
        return tuple(self._y)

    def process(self, sample: float) -> float:
        """Feed one sample through the section and return its output."""
        self._x = [float(sample), self._x[0], self._x[1]]
        output = sum(coeff * past for coeff, past in zip(self.b, self._x))
        for coeff, past in zip(self.a, self._y):
            output -= coeff * past
        self._y = [output, self._y[0]]
        return output

    def reset(self) -> None:
        """Clear the stored inputs and outputs."""
        self._x = [0.0, 0.0, 0.0]
        self._y = [0.0, 0.0]

    def __repr__(self) -> str:
        return f"Biquad(b={self.b!r}, a={self.a!r})"


class FilterCascade:
    """Biquad sections applied one after another."""

    def __init__(self, sections: Iterable[Biquad]) -> None:
        self.sections = tuple(sections)
        if not self.sections:
            raise ValueError("a filter cascade needs at least one section")

    def __len__(self) -> int:
        return len(self.sections)

    def __iter__(self) -> Iterator[Biquad]:
        return iter(self.sections)

    def process(self, sample: float) -> float:
        """Pass one sample through every section in order."""
        value = float(sample)
        for section in self.sections:
            value = section.process(value)
        return value

    def reset(self) -> None:
        """Reset every section."""
        for section in self.sections:
            section.reset()


def butterworth_bandpass() -> FilterCascade:
    """Build the three-section Butterworth band-pass filter for 1 kHz pulse samples."""
    return FilterCascade(Biquad(b, a) for b, a in BUTTERWORTH_SECTIONS)