"""Unit tests for pitch tracking and the speaker profile heuristics."""

import numpy as np
import pytest

from conftest import SAMPLE_RATE, sine
from voicestudio_dsp.dsp.analysis.pitch import (
    build_speaker_profile,
    classify_gender,
    classify_voice_type,
    detect_pitch,
    pitch_track,
    speaking_rate_wpm,
    valid_pitches,
)


@pytest.mark.unit
class TestDetectPitch:
    def test_window_shorter_than_lag_range(self):
        assert detect_pitch(sine(200.0, seconds=10 / SAMPLE_RATE), SAMPLE_RATE) == 0.0

    def test_silent_window(self):
        assert detect_pitch(np.zeros(1323), SAMPLE_RATE) == 0.0

    def test_sine_window(self):
        window = sine(220.0)[:1323]
        assert detect_pitch(window, SAMPLE_RATE) == pytest.approx(220.0, abs=3.0)

    def test_track_windows(self):
        pitches = pitch_track(sine(440.0), SAMPLE_RATE)

        # 1323-sample windows with a 661-sample hop over one second
        assert len(pitches) == len(range(0, SAMPLE_RATE - 1323, 661))
        assert np.mean(pitches) == pytest.approx(440.0, abs=5.0)

    def test_valid_pitch_bounds_are_exclusive(self):
        assert valid_pitches([50.0, 50.1, 499.9, 500.0, 600.0]) == [50.1, 499.9]


@pytest.mark.unit
class TestSpeakerHeuristics:
    @pytest.mark.parametrize(
        "avg, gender, confidence",
        [
            (100.0, "male", 82.5),
            (300.0, "female", 90.0),
            (200.0, "female", 67.5),
            (165.0, "unknown", 0.0),
        ],
    )
    def test_classify_gender(self, avg, gender, confidence):
        assert classify_gender(avg) == (gender, confidence)

    def test_no_pitch_is_unknown(self):
        assert classify_gender(0.0, has_pitch=False) == ("unknown", 0.0)

    @pytest.mark.parametrize(
        "gender, avg, voice",
        [
            ("male", 129.0, "bass"),
            ("male", 131.0, "tenor"),
            ("female", 200.0, "alto"),
            ("female", 250.0, "soprano"),
            ("unknown", 165.0, "unknown"),
        ],
    )
    def test_voice_type(self, gender, avg, voice):
        assert classify_voice_type(gender, avg) == voice

    def test_speaking_rate(self):
        assert speaking_rate_wpm(0.04) == 0
        assert speaking_rate_wpm(0.05) == 0
        assert speaking_rate_wpm(0.1001) == 135
        assert speaking_rate_wpm(0.3001) == 195


@pytest.mark.unit
class TestSpeakerProfile:
    def test_high_sine_reads_as_soprano(self):
        p = build_speaker_profile(sine(440.0), SAMPLE_RATE)

        assert p.gender == "female"
        assert p.voice_type == "soprano"
        assert p.confidence == 90.0
        assert p.pitch_range["average"] == pytest.approx(440.0, abs=5.0)
        assert p.pitch_range["min"] <= p.pitch_range["average"] <= p.pitch_range["max"]

    def test_low_sine_reads_as_bass(self):
        p = build_speaker_profile(sine(120.0), SAMPLE_RATE)

        assert p.gender == "male"
        assert p.voice_type == "bass"
        assert p.pitch_range["average"] == pytest.approx(120.0, abs=3.0)
        assert p.confidence == pytest.approx(72.5, abs=2.0)
        # mean |0.5 sin| is about 0.318, well past the energy cap
        assert p.energy == 100.0

    def test_silence_has_no_pitch(self):
        p = build_speaker_profile(np.zeros(SAMPLE_RATE), SAMPLE_RATE)

        assert p.gender == "unknown"
        assert p.confidence == 0.0
        assert p.voice_type == "unknown"
        assert p.pitch_range == {"min": 0.0, "max": 0.0, "average": 0.0}
        assert p.energy == 0.0
        assert p.speaking_rate_wpm == 0
