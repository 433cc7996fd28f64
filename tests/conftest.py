"""Pytest configuration and fixtures for VoiceStudio DSP tests."""

import logging

import numpy as np
import pytest

from voicestudio_dsp.dsp.buffer import SampleBuffer
from voicestudio_dsp.settings import get_settings

# Configure logging for tests
logging.basicConfig(level=logging.INFO)

SAMPLE_RATE = 44100


def sine(freq, seconds=1.0, sr=SAMPLE_RATE, amplitude=0.5):
    t = np.arange(int(round(sr * seconds))) / sr
    return amplitude * np.sin(2 * np.pi * freq * t)


@pytest.fixture
def make_buffer():
    """Factory: wrap a 1-D or [C, N] array into a SampleBuffer."""

    def _make(samples, sr=SAMPLE_RATE):
        return SampleBuffer.from_channels(np.asarray(samples, dtype=np.float64), sr)

    return _make


@pytest.fixture
def sine_440():
    """One second of a 440 Hz sine at half scale, mono, 44.1 kHz."""
    return SampleBuffer.from_channels(sine(440.0), SAMPLE_RATE)


@pytest.fixture
def stereo_sine():
    left = sine(220.0, amplitude=0.4)
    right = sine(330.0, amplitude=0.25)
    return SampleBuffer.from_channels(np.vstack([left, right]), SAMPLE_RATE)


@pytest.fixture
def silent_buffer():
    return SampleBuffer.from_channels(np.zeros((2, 22050)), SAMPLE_RATE)


@pytest.fixture
def noisy_voice():
    """Harmonic 150 Hz tone with low-level noise and a few clicks."""
    rng = np.random.default_rng(1234)
    t = np.arange(SAMPLE_RATE) / SAMPLE_RATE
    voice = 0.3 * np.sin(2 * np.pi * 150 * t) + 0.1 * np.sin(2 * np.pi * 300 * t)
    noise = 0.002 * rng.standard_normal(t.shape[0])
    x = voice + noise
    x[[5000, 12000, 30000]] = 0.95
    return SampleBuffer.from_channels(x, SAMPLE_RATE)


@pytest.fixture
def output_dir(tmp_path, monkeypatch):
    """Point rendered outputs at a temporary directory."""
    monkeypatch.setenv("DSP_OUTPUT_DIR", str(tmp_path))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()
