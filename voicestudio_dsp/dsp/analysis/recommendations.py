"""Human-readable advice derived from the quality and spectral metrics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .quality import QualityMetrics
from .spectral import SpectralAnalysis


@dataclass(frozen=True)
class QualityRating:
    label: str
    color: str


def quality_rating(score: float) -> QualityRating:
    if score >= 90:
        return QualityRating("Excellent", "green")
    if score >= 75:
        return QualityRating("Very Good", "lime")
    if score >= 60:
        return QualityRating("Good", "yellow")
    if score >= 40:
        return QualityRating("Fair", "orange")
    return QualityRating("Poor", "red")


def generate_recommendations(quality: QualityMetrics, spectral: SpectralAnalysis) -> List[str]:
    recs: List[str] = []

    if quality.clipping:
        recs.append("Audio clipping detected. Reduce input gain or volume.")
    if quality.dynamic_range_db < 10:
        recs.append("Low dynamic range. Consider using less compression.")
    if quality.signal_to_noise_db < 30:
        recs.append("Low signal-to-noise ratio. Record in a quieter environment.")
    if quality.silence_ratio > 0.3:
        recs.append("High silence ratio. Consider trimming silence from recording.")
    if spectral.bandwidth < 2000:
        recs.append("Narrow frequency range. Check microphone quality.")
    if spectral.dominant_frequency < 100 or spectral.dominant_frequency > 4000:
        recs.append("Unusual dominant frequency. Verify proper microphone placement.")

    if quality.overall_score >= 90:
        recs.append("Excellent audio quality! No improvements needed.")
    elif quality.overall_score >= 70:
        recs.append("Good audio quality with minor room for improvement.")
    elif quality.overall_score >= 50:
        recs.append("Moderate quality. Consider the suggestions above.")
    else:
        recs.append("Poor audio quality. Multiple issues need attention.")

    return recs
