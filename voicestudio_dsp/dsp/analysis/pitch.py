"""Autocorrelation pitch tracking and the heuristic speaker profile.

The pitch tracker slides 30 ms windows (50% overlap) over channel 0 and
picks, per window, the lag in the 50-500 Hz period range with the largest
positive autocorrelation. The speaker profile is derived only from the
surviving pitch estimates and the mean absolute amplitude; the gender,
voice type and speaking-rate rules are fixed linear heuristics, not a
trained classifier.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal

import logging

import numpy as np

logger = logging.getLogger("voicestudio_dsp.analysis.pitch")

Gender = Literal["male", "female", "unknown"]
VoiceType = Literal["bass", "tenor", "alto", "soprano", "unknown"]

MIN_PITCH_HZ = 50.0
MAX_PITCH_HZ = 500.0
WINDOW_SECONDS = 0.03
GENDER_SPLIT_HZ = 165.0


@dataclass
class SpeakerProfile:
    gender: Gender
    confidence: float
    pitch_range: Dict[str, float]
    speaking_rate_wpm: int
    energy: float
    voice_type: VoiceType


def detect_pitch(window: np.ndarray, sample_rate: int) -> float:
    """Return the autocorrelation pitch of ``window`` in Hz, or 0.0."""

    x = window.astype(np.float64)
    n = x.shape[0]
    min_lag = max(1, int(sample_rate // MAX_PITCH_HZ))
    max_lag = min(int(sample_rate // MIN_PITCH_HZ), n)
    if n == 0 or min_lag >= max_lag:
        return 0.0

    # corr[lag] = sum_i x[i] * x[i + lag]
    corr = np.correlate(x, x, mode="full")[n - 1 :]
    candidates = corr[min_lag:max_lag]
    best = int(np.argmax(candidates))
    if candidates[best] <= 0.0:
        return 0.0
    return float(sample_rate / (min_lag + best))


def pitch_track(channel: np.ndarray, sample_rate: int) -> List[float]:
    """Raw per-window pitch estimates (only windows with a positive peak)."""

    window = int(np.floor(sample_rate * WINDOW_SECONDS))
    hop = window // 2
    if window <= 0 or hop <= 0:
        return []

    pitches: List[float] = []
    for start in range(0, channel.shape[0] - window, hop):
        pitch = detect_pitch(channel[start : start + window], sample_rate)
        if pitch > 0.0:
            pitches.append(pitch)
    return pitches


def valid_pitches(pitches: List[float]) -> List[float]:
    return [p for p in pitches if MIN_PITCH_HZ < p < MAX_PITCH_HZ]


def classify_gender(avg_pitch: float, has_pitch: bool = True) -> tuple[Gender, float]:
    if not has_pitch:
        return "unknown", 0.0
    if avg_pitch < GENDER_SPLIT_HZ:
        return "male", float(min(90.0, (GENDER_SPLIT_HZ - avg_pitch) / 2.0 + 50.0))
    if avg_pitch > GENDER_SPLIT_HZ:
        return "female", float(min(90.0, (avg_pitch - GENDER_SPLIT_HZ) / 2.0 + 50.0))
    return "unknown", 0.0


def classify_voice_type(gender: Gender, avg_pitch: float) -> VoiceType:
    if gender == "male":
        return "bass" if avg_pitch < 130.0 else "tenor"
    if gender == "female":
        return "alto" if avg_pitch < 220.0 else "soprano"
    return "unknown"


def speaking_rate_wpm(mean_abs: float) -> int:
    # crude proxy: louder delivery reads as faster speech
    if mean_abs <= 0.05:
        return 0
    return int(np.floor(120.0 + (mean_abs - 0.05) * 300.0))


def build_speaker_profile(channel: np.ndarray, sample_rate: int) -> SpeakerProfile:
    x = channel.astype(np.float64)
    pitches = valid_pitches(pitch_track(x, sample_rate))

    if pitches:
        min_pitch = float(min(pitches))
        max_pitch = float(max(pitches))
        avg_pitch = float(sum(pitches) / len(pitches))
    else:
        min_pitch = max_pitch = avg_pitch = 0.0

    gender, confidence = classify_gender(avg_pitch, has_pitch=bool(pitches))
    voice_type = classify_voice_type(gender, avg_pitch)

    mean_abs = float(np.mean(np.abs(x)))
    energy = float(np.clip(mean_abs * 500.0, 0.0, 100.0))

    logger.debug(
        "[ANALYSIS] pitch windows=%d avg=%.1f Hz gender=%s (%.0f%%) voice=%s",
        len(pitches),
        avg_pitch,
        gender,
        confidence,
        voice_type,
    )

    return SpeakerProfile(
        gender=gender,
        confidence=confidence,
        pitch_range={"min": min_pitch, "max": max_pitch, "average": avg_pitch},
        speaking_rate_wpm=speaking_rate_wpm(mean_abs),
        energy=energy,
        voice_type=voice_type,
    )
