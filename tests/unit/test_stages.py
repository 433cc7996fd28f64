"""Unit tests for the individual enhancement stages."""

import numpy as np
import pytest

from voicestudio_dsp.dsp_engine.deesser import deess
from voicestudio_dsp.dsp_engine.dynamics import (
    PeakNormalizer,
    SoftCompressor,
    compress,
    enhance_clarity,
    normalize,
)
from voicestudio_dsp.dsp_engine.restoration import (
    local_energy,
    noise_threshold_linear,
    reduce_noise,
    remove_breaths,
    remove_clicks,
)
from voicestudio_dsp.dsp_engine.tone import apply_tone, trailing_mean

SR = 44100


def mono(*values):
    return np.array([values], dtype=np.float32)


@pytest.mark.unit
class TestNoiseReduction:
    def test_threshold_range(self):
        assert noise_threshold_linear(0) == pytest.approx(0.01)
        assert noise_threshold_linear(100) == pytest.approx(0.001)

    def test_quiet_samples_are_attenuated(self):
        y = reduce_noise(mono(0.001, 0.5, -0.002, 0.3), SR, amount=50)

        assert y[0] == pytest.approx([0.0005, 0.5, -0.001, 0.3], abs=1e-7)

    def test_profile_comes_from_first_channel(self):
        x = np.array([[0.001, 0.5], [0.3, 0.002]], dtype=np.float32)
        y = reduce_noise(x, SR, amount=50)

        assert y[1] == pytest.approx([0.2995, 0.002], abs=1e-7)


@pytest.mark.unit
class TestClickRemoval:
    def test_isolated_click_is_removed(self):
        x = np.zeros((1, 20), dtype=np.float32)
        x[0, 10] = 1.0

        y = remove_clicks(x, SR, amount=100)
        assert np.all(y == 0.0)

    def test_smooth_signal_untouched(self):
        x = mono(*np.linspace(0.0, 0.5, 50))
        np.testing.assert_array_equal(remove_clicks(x, SR, amount=100), x)


@pytest.mark.unit
class TestBreathRemoval:
    def test_local_energy_of_constant(self):
        energy = local_energy(np.full(200, 0.5), window=50)

        # full windows see 100 samples of 0.25 over a divisor of 50
        assert energy[100] == pytest.approx(np.sqrt(0.5))
        assert energy[0] == pytest.approx(0.5)

    def test_quiet_passage_attenuated(self):
        x = np.full((1, 200), 0.01, dtype=np.float32)
        y = remove_breaths(x, 1000, amount=50)

        assert y == pytest.approx(x * 0.5)

    def test_loud_passage_kept(self):
        x = np.full((1, 200), 0.5, dtype=np.float32)
        np.testing.assert_array_equal(remove_breaths(x, 1000, amount=50), x)


@pytest.mark.unit
class TestDeEsser:
    def test_steep_steps_are_ducked(self):
        y = deess(mono(0.0, 0.5, 0.5, 0.0), SR, amount=100)
        assert y[0] == pytest.approx([0.0, 0.15, 0.5, 0.0])

    def test_first_sample_passes_through(self):
        y = deess(mono(0.9, -0.9, 0.9), SR, amount=100)
        assert y[0, 0] == pytest.approx(0.9)
        assert y[0, 1:] == pytest.approx([-0.27, 0.27])


@pytest.mark.unit
class TestTone:
    def test_brightness_adds_first_difference(self):
        y = apply_tone(mono(0.0, 0.2, 0.2, -0.1), SR, brightness=50, warmth=0)
        assert y[0] == pytest.approx([0.0, 0.29, 0.2, -0.235])

    def test_negative_brightness_is_a_trim(self):
        x = mono(0.0, 0.2, -0.4, 0.8)
        y = apply_tone(x, SR, brightness=-50, warmth=0)
        assert y == pytest.approx(x * 0.5)

    def test_trailing_mean(self):
        m = trailing_mean(np.ones(12))
        assert m[0] == pytest.approx(0.1)
        assert m[9:] == pytest.approx([1.0, 1.0, 1.0])

    def test_warmth_blends_toward_trailing_mean(self):
        x = mono(*(0.01 * np.arange(40)))
        y = apply_tone(x, SR, brightness=0, warmth=50)

        np.testing.assert_array_equal(y[0, :11], x[0, :11])
        # a ramp sits 0.045 above its 10-sample mean; 30% of that is removed
        assert y[0, 11:] == pytest.approx(x[0, 11:] - 0.0135, abs=1e-6)

    def test_short_buffer_skips_warmth(self):
        x = mono(0.1, 0.2, 0.3)
        np.testing.assert_array_equal(apply_tone(x, SR, brightness=0, warmth=50), x)


@pytest.mark.unit
class TestDynamics:
    def test_clarity_gain_and_clip(self):
        y = enhance_clarity(mono(0.5, 0.9, -0.9), SR, amount=100)
        assert y[0] == pytest.approx([0.65, 1.0, -1.0])

    def test_compressor_ratio_range(self):
        assert SoftCompressor(amount=0).ratio == 1.0
        assert SoftCompressor(amount=100).ratio == 4.0

    def test_compression_above_threshold_only(self):
        y = compress(mono(0.7, -0.7, 0.2), SR, amount=100)
        assert y[0] == pytest.approx([0.4, -0.4, 0.2])

    def test_normalize_to_target_peak(self):
        y = normalize(mono(0.1, -0.25, 0.2), SR)
        assert float(np.max(np.abs(y))) == pytest.approx(0.95)
        assert y[0] == pytest.approx([0.38, -0.95, 0.76])

    def test_normalize_silence_is_noop(self):
        x = np.zeros((2, 16), dtype=np.float32)
        np.testing.assert_array_equal(PeakNormalizer().process(x), x)

    def test_normalize_disabled(self):
        x = mono(0.1, 0.2)
        np.testing.assert_array_equal(normalize(x, SR, enabled=False), x)
