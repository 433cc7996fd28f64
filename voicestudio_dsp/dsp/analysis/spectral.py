"""Spectral summary of a whole recording.

The mono downmix is cut into Hann-windowed frames of ``ANALYSIS_SIZE``
samples (hop of half a frame, zero padded when the clip is shorter than a
frame) and the magnitude spectra are averaged. From the first
``ANALYSIS_SIZE // 2`` bins we derive:

- dominant frequency and its 2nd..5th harmonics above 30% of the peak
- spectral centroid (magnitude weighted mean frequency)
- spectral flatness (geometric / arithmetic mean of nonzero bins)
- the frequency range above 10% of the peak and its bandwidth
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

import logging

import numpy as np
import librosa

logger = logging.getLogger("voicestudio_dsp.analysis.spectral")

ANALYSIS_SIZE = 8192
HARMONIC_THRESHOLD = 0.3
BANDWIDTH_THRESHOLD = 0.1

_FRAME_BATCH = 256


@dataclass
class SpectralAnalysis:
    frequency_range: Dict[str, float]
    dominant_frequency: float
    harmonics: List[float] = field(default_factory=list)
    spectral_centroid: float = 0.0
    spectral_flatness: float = 0.0
    bandwidth: float = 0.0


def magnitude_spectrum(mono: np.ndarray, n_fft: int = ANALYSIS_SIZE) -> np.ndarray:
    """Frame-averaged magnitude spectrum with ``n_fft // 2`` bins."""

    x = mono.astype(np.float64)
    if x.shape[0] < n_fft:
        x = np.pad(x, (0, n_fft - x.shape[0]))

    hop = n_fft // 2
    n_frames = 1 + (x.shape[0] - n_fft) // hop

    acc = np.zeros(n_fft // 2 + 1, dtype=np.float64)
    # batch frames so long uploads never hold the whole STFT at once
    for start in range(0, n_frames, _FRAME_BATCH):
        count = min(_FRAME_BATCH, n_frames - start)
        segment = x[start * hop : start * hop + (count - 1) * hop + n_fft]
        S = librosa.stft(segment, n_fft=n_fft, hop_length=hop, window="hann", center=False)
        acc += np.abs(S).sum(axis=1)
    return (acc / n_frames)[: n_fft // 2]


def bin_to_hz(index: int, sample_rate: int, num_bins: int) -> float:
    return float(index * sample_rate / (2.0 * num_bins))


def _flatness(mags: np.ndarray) -> float:
    nonzero = mags[mags > 0.0]
    if nonzero.size == 0:
        return 0.0
    arithmetic = float(np.mean(nonzero))
    if arithmetic <= 0.0:
        return 0.0
    geometric = float(np.exp(np.mean(np.log(nonzero))))
    return float(np.clip(geometric / arithmetic, 0.0, 1.0))


def analyze_spectrum(mono: np.ndarray, sample_rate: int, n_fft: int = ANALYSIS_SIZE) -> SpectralAnalysis:
    mags = magnitude_spectrum(mono, n_fft)
    num_bins = mags.shape[0]
    freqs = librosa.fft_frequencies(sr=sample_rate, n_fft=n_fft)[:num_bins]

    peak_index = int(np.argmax(mags))
    peak = float(mags[peak_index])
    if peak <= 0.0:
        logger.debug("[ANALYSIS] spectrum is silent, returning empty spectral summary")
        return SpectralAnalysis(frequency_range={"min": 0.0, "max": 0.0}, dominant_frequency=0.0)

    dominant = bin_to_hz(peak_index, sample_rate, num_bins)

    harmonics: List[float] = []
    if peak_index > 0:
        for n in range(2, 6):
            idx = peak_index * n
            if idx < num_bins and mags[idx] > peak * HARMONIC_THRESHOLD:
                harmonics.append(dominant * n)

    total = float(np.sum(mags))
    centroid = float(np.sum(freqs * mags) / total) if total > 0.0 else 0.0

    above = np.nonzero(mags > peak * BANDWIDTH_THRESHOLD)[0]
    min_freq = float(freqs[above[0]])
    max_freq = float(freqs[above[-1]])

    result = SpectralAnalysis(
        frequency_range={"min": min_freq, "max": max_freq},
        dominant_frequency=dominant,
        harmonics=harmonics,
        spectral_centroid=centroid,
        spectral_flatness=_flatness(mags),
        bandwidth=max_freq - min_freq,
    )

    logger.debug(
        "[ANALYSIS] spectrum dominant=%.1f Hz centroid=%.0f Hz flatness=%.3f bandwidth=%.0f Hz harmonics=%d",
        result.dominant_frequency,
        result.spectral_centroid,
        result.spectral_flatness,
        result.bandwidth,
        len(harmonics),
    )
    return result
