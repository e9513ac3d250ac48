import pytest

from ecgpulse.biquad import (
    BUTTERWORTH_SECTIONS,
    Biquad,
    FilterCascade,
    butterworth_bandpass,
)


def test_identity_section_passes_samples_through():
    section = Biquad((1.0, 0.0, 0.0), (0.0, 0.0))
    samples = [3.0, -1.5, 7.25, 0.0]
    assert [section.process(s) for s in samples] == samples


def test_pure_delay_section():
    section = Biquad((0.0, 0.0, 1.0), (0.0, 0.0))
    assert [section.process(s) for s in [1.0, 2.0, 3.0, 4.0]] == [0.0, 0.0, 1.0, 2.0]


def test_feedback_halves_impulse_response():
    section = Biquad((1.0, 0.0, 0.0), (-0.5, 0.0))
    outputs = [section.process(s) for s in [1.0] + [0.0] * 6]
    assert outputs[0] == 1.0
    for previous, current in zip(outputs, outputs[1:]):
        assert current == pytest.approx(0.5 * previous)


def test_state_is_newest_first():
    section = Biquad((1.0, 0.0, 0.0), (0.0, 0.0))
    for s in [1.0, 2.0, 3.0]:
        section.process(s)
    assert section.inputs == (3.0, 2.0, 1.0)
    assert section.outputs == (3.0, 2.0)


def test_reset_restores_initial_behaviour():
    section = Biquad((0.5, 0.25, 0.125), (-0.3, 0.1))
    fresh = [section.process(s) for s in [1.0, 4.0, -2.0]]
    section.process(9.0)
    section.reset()
    assert section.inputs == (0.0, 0.0, 0.0)
    assert [section.process(s) for s in [1.0, 4.0, -2.0]] == fresh


@pytest.mark.parametrize("b,a", [((1.0, 0.0), (0.0, 0.0)), ((1.0, 0.0, 0.0), (0.0,))])
def test_wrong_coefficient_count_rejected(b, a):
    with pytest.raises(ValueError):
        Biquad(b, a)


def test_cascade_chains_sections():
    first = Biquad((1.0, 0.0, 0.0), (-0.5, 0.0))
    second = Biquad((0.0, 1.0, 0.0), (0.0, 0.0))
    cascade = FilterCascade([Biquad(first.b, first.a), Biquad(second.b, second.a)])
    for s in [1.0, 0.0, 2.0, -1.0]:
        assert cascade.process(s) == second.process(first.process(s))


def test_empty_cascade_rejected():
    with pytest.raises(ValueError):
        FilterCascade([])


def test_butterworth_uses_source_coefficients():
    cascade = butterworth_bandpass()
    assert len(cascade) == 3
    assert cascade.sections[0].b == (2.23775228e-06, 4.47550457e-06, 2.23775228e-06)
    assert cascade.sections[2].a == (-1.99602456, 0.996052349)
    assert [(s.b, s.a) for s in cascade] == list(BUTTERWORTH_SECTIONS)


def test_butterworth_rejects_constant_input():
    cascade = butterworth_bandpass()
    output = 0.0
    for _ in range(20000):
        output = cascade.process(100.0)
    assert abs(output) < 1e-6


def test_cascade_reset_clears_all_sections():
    cascade = butterworth_bandpass()
    first = [cascade.process(s) for s in [5.0, 1.0, -3.0]]
    cascade.reset()
    assert all(section.outputs == (0.0, 0.0) for section in cascade)
    assert [cascade.process(s) for s in [5.0, 1.0, -3.0]] == first