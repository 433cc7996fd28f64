"""Feature extraction entry point.

``analyze`` runs every extractor over one buffer and returns a plain
result object. It is read-only and stateless: the same buffer always
yields the same numbers.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

import logging

from ..buffer import SampleBuffer
from .emotion import EmotionAnalysis, detect_emotion
from .pitch import SpeakerProfile, build_speaker_profile
from .quality import QualityMetrics, compute_quality_metrics
from .spectral import SpectralAnalysis, analyze_spectrum

logger = logging.getLogger("voicestudio_dsp.analysis.extractor")


@dataclass
class AnalysisResult:
    quality: QualityMetrics
    spectral: SpectralAnalysis
    speaker: SpeakerProfile
    emotion: EmotionAnalysis

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def analyze(buffer: SampleBuffer) -> AnalysisResult:
    """Compute quality, spectral, speaker and emotion features.

    Raises:
        InvalidBufferError: if the buffer is empty, ragged or has a
            non-positive sample rate.
    """

    buffer.validate()

    first = buffer.channel(0)
    quality = compute_quality_metrics(first)
    spectral = analyze_spectrum(buffer.mono(), buffer.sample_rate)
    speaker = build_speaker_profile(first, buffer.sample_rate)
    emotion = detect_emotion(first)

    logger.info(
        "[ANALYSIS] score=%.0f peak=%.2f dB snr=%.1f dB dominant=%.1f Hz pitch=%.1f Hz gender=%s emotion=%s",
        quality.overall_score,
        quality.peak_level_db,
        quality.signal_to_noise_db,
        spectral.dominant_frequency,
        speaker.pitch_range["average"],
        speaker.gender,
        emotion.dominant,
    )

    return AnalysisResult(quality=quality, spectral=spectral, speaker=speaker, emotion=emotion)
