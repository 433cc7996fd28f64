"""Unit tests for the time-domain quality metrics."""

import numpy as np
import pytest

from conftest import SAMPLE_RATE, sine
from voicestudio_dsp.dsp.analysis.quality import (
    EPSILON,
    compute_quality_metrics,
    estimate_noise_floor,
    overall_score,
    safe_db,
)


@pytest.mark.unit
class TestQualityMetrics:
    """Level, noise and score figures on synthetic signals."""

    def test_half_scale_sine(self):
        q = compute_quality_metrics(sine(440.0))

        assert q.peak_level_db == pytest.approx(20 * np.log10(0.5), abs=0.01)
        assert q.average_level_db == pytest.approx(20 * np.log10(0.5 / np.sqrt(2)), abs=0.01)
        assert q.dynamic_range_db == pytest.approx(3.01, abs=0.05)
        assert not q.clipping
        assert q.silence_ratio < 0.05
        # crest < 10 dB and SNR < 20 dB both cost points
        assert q.signal_to_noise_db == pytest.approx(17.8, abs=0.5)
        assert q.overall_score == 65
        assert q.clarity == pytest.approx(70 + q.signal_to_noise_db / 2)

    def test_full_scale_sine_is_clipping(self):
        q = compute_quality_metrics(sine(440.0, amplitude=1.0))

        assert q.clipping
        assert q.overall_score == 35

    def test_silence_stays_finite(self):
        q = compute_quality_metrics(np.zeros(SAMPLE_RATE))

        assert q.peak_level_db == pytest.approx(-240.0)
        assert q.average_level_db == pytest.approx(-240.0)
        assert q.dynamic_range_db == 0.0
        assert q.signal_to_noise_db == 0.0
        assert q.silence_ratio == 1.0
        assert q.clarity == 70.0
        assert q.overall_score == 55

    def test_single_sample(self):
        q = compute_quality_metrics(np.array([0.5]))

        assert np.isfinite(q.signal_to_noise_db)
        assert q.dynamic_range_db == pytest.approx(0.0)
        assert 0 <= q.overall_score <= 100

    def test_score_and_clarity_bounds(self, noisy_voice):
        q = compute_quality_metrics(noisy_voice.channel(0))

        assert 0 <= q.overall_score <= 100
        assert 0 <= q.clarity <= 100
        assert 0 <= q.silence_ratio <= 1


@pytest.mark.unit
class TestQualityHelpers:
    def test_safe_db_floors_at_epsilon(self):
        assert safe_db(0.0) == pytest.approx(20 * np.log10(EPSILON))
        assert safe_db(1.0) == 0.0

    def test_noise_floor_needs_ten_samples(self):
        assert estimate_noise_floor(np.ones(9)) == EPSILON
        assert estimate_noise_floor(np.ones(10)) == pytest.approx(1.0)

    def test_noise_floor_uses_quietest_tenth(self):
        x = np.concatenate([np.full(10, 0.001), np.full(90, 0.5)])
        assert estimate_noise_floor(x) == pytest.approx(0.001)

    @pytest.mark.parametrize(
        "clipping, dr, snr, silence, expected",
        [
            (False, 20.0, 40.0, 0.0, 100.0),
            (True, 20.0, 40.0, 0.0, 70.0),
            (False, 5.0, 40.0, 0.0, 80.0),
            (False, 20.0, 10.0, 0.0, 85.0),
            (False, 20.0, 40.0, 0.5, 90.0),
            (True, 5.0, 10.0, 0.5, 25.0),
        ],
    )
    def test_overall_score_deductions(self, clipping, dr, snr, silence, expected):
        assert overall_score(clipping, dr, snr, silence) == expected
