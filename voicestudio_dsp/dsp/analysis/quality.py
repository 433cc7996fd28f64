"""Time-domain quality metrics for a voice recording.

Single pass over channel 0 of the buffer:
- peak / average level in dBFS and the crest (dynamic range) between them
- clipping flag and silence ratio
- signal-to-noise ratio against the quietest 10% of samples
- a 0..100 clarity figure and an overall quality score

Every dB conversion floors its argument at ``EPSILON`` so silent or very
short buffers still produce finite numbers.
"""

from __future__ import annotations

from dataclasses import dataclass

import logging

import numpy as np

logger = logging.getLogger("voicestudio_dsp.analysis.quality")

EPSILON = 1e-12

CLIPPING_LEVEL = 0.99
SILENCE_LEVEL = 0.01
NOISE_FLOOR_FRACTION = 0.1


@dataclass
class QualityMetrics:
    overall_score: float
    clarity: float
    dynamic_range_db: float
    signal_to_noise_db: float
    peak_level_db: float
    average_level_db: float
    clipping: bool
    silence_ratio: float


def safe_db(value: float, eps: float = EPSILON) -> float:
    return float(20.0 * np.log10(max(float(value), eps)))


def estimate_noise_floor(channel: np.ndarray) -> float:
    """RMS of the quietest 10% of sample magnitudes.

    Returns ``EPSILON`` when the subset is empty (fewer than ten samples)
    or entirely zero.
    """

    mags = np.sort(np.abs(channel.astype(np.float64)))
    count = int(np.floor(mags.shape[0] * NOISE_FLOOR_FRACTION))
    if count <= 0:
        return EPSILON
    quiet = mags[:count]
    floor = float(np.sqrt(np.mean(quiet ** 2)))
    return max(floor, EPSILON)


def overall_score(clipping: bool, dynamic_range_db: float, snr_db: float, silence_ratio: float) -> float:
    score = 100.0
    if clipping:
        score -= 30.0
    if dynamic_range_db < 10.0:
        score -= 20.0
    if snr_db < 20.0:
        score -= 15.0
    if silence_ratio > 0.3:
        score -= 10.0
    return float(np.clip(score, 0.0, 100.0))


def compute_quality_metrics(channel: np.ndarray) -> QualityMetrics:
    x = channel.astype(np.float64)
    mags = np.abs(x)

    peak = float(np.max(mags))
    rms = float(np.sqrt(np.mean(x ** 2)))

    peak_db = safe_db(peak)
    avg_db = safe_db(rms)
    dynamic_range_db = peak_db - avg_db

    clipping = bool(peak >= CLIPPING_LEVEL)
    silence_ratio = float(np.count_nonzero(mags < SILENCE_LEVEL) / mags.shape[0])

    noise_floor = estimate_noise_floor(x)
    snr_db = float(20.0 * np.log10(max(rms, EPSILON) / noise_floor))

    clarity = float(np.clip(70.0 + snr_db / 2.0, 0.0, 100.0))
    score = overall_score(clipping, dynamic_range_db, snr_db, silence_ratio)

    logger.debug(
        "[ANALYSIS] quality peak=%.2f dB avg=%.2f dB snr=%.1f dB silence=%.2f clip=%s score=%.0f",
        peak_db,
        avg_db,
        snr_db,
        silence_ratio,
        clipping,
        score,
    )

    return QualityMetrics(
        overall_score=score,
        clarity=clarity,
        dynamic_range_db=dynamic_range_db,
        signal_to_noise_db=snr_db,
        peak_level_db=peak_db,
        average_level_db=avg_db,
        clipping=clipping,
        silence_ratio=silence_ratio,
    )
