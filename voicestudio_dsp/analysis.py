import json
import time
import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, BinaryIO, Dict, List, Optional

from voicestudio_dsp.dsp.analysis import AnalysisResult, analyze, generate_recommendations, quality_rating
from voicestudio_dsp.dsp.buffer import SampleBuffer
from voicestudio_dsp.dsp_engine.analysis import LoudnessStats, measure_loudness
from voicestudio_dsp.storage import read_audio

BIT_DEPTH = 16


@dataclass
class AudioMetrics:
    duration: float
    sample_rate: int
    bit_depth: int
    channels: int
    file_size: int
    format: str


@dataclass
class AnalyticsReport:
    id: str
    timestamp: float
    audio_metrics: AudioMetrics
    loudness: LoudnessStats
    analysis: AnalysisResult
    rating: str
    recommendations: List[str] = field(default_factory=list)


@dataclass
class ReportComparison:
    quality_improvement: float
    duration_diff: float
    recommendations: List[str]


def audio_metrics(buffer: SampleBuffer, fmt: str = "wav") -> AudioMetrics:
    """Container-level facts, with size estimated as 16-bit PCM."""

    return AudioMetrics(
        duration=buffer.duration,
        sample_rate=buffer.sample_rate,
        bit_depth=BIT_DEPTH,
        channels=buffer.num_channels,
        file_size=buffer.num_samples * buffer.num_channels * BIT_DEPTH // 8,
        format=fmt or "wav",
    )


def build_report(buffer: SampleBuffer, fmt: str = "wav") -> AnalyticsReport:
    result = analyze(buffer)
    return AnalyticsReport(
        id=f"analytics-{uuid.uuid4().hex[:12]}",
        timestamp=time.time(),
        audio_metrics=audio_metrics(buffer, fmt),
        loudness=measure_loudness(buffer),
        analysis=result,
        rating=quality_rating(result.quality.overall_score).label,
        recommendations=generate_recommendations(result.quality, result.spectral),
    )


def report_to_dict(report: AnalyticsReport) -> Dict[str, Any]:
    return asdict(report)


def export_report_json(report: AnalyticsReport) -> str:
    return json.dumps(report_to_dict(report), indent=2)


def compare_reports(before: AnalyticsReport, after: AnalyticsReport) -> ReportComparison:
    """Score and duration deltas between two analyses of related takes."""

    improvement = after.analysis.quality.overall_score - before.analysis.quality.overall_score
    duration_diff = after.audio_metrics.duration - before.audio_metrics.duration

    recs: List[str] = []
    if improvement > 10:
        recs.append("Significant quality improvement detected!")
    elif improvement < -10:
        recs.append("Quality has decreased. Review recording conditions.")
    if abs(duration_diff) > 5:
        recs.append(f"Duration changed by {abs(duration_diff):.1f}s")

    return ReportComparison(quality_improvement=improvement, duration_diff=duration_diff, recommendations=recs)


def format_duration(seconds: float) -> str:
    mins = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{mins}:{secs:02d}"


def format_file_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def analyze_audio(fileobj: BinaryIO, max_seconds: Optional[float] = None) -> Dict[str, Any]:
    """Decode an upload and return its analytics report as a plain dict."""

    buffer, fmt = read_audio(fileobj, max_seconds=max_seconds)
    report = build_report(buffer, fmt)
    payload = report_to_dict(report)
    payload["duration_label"] = format_duration(report.audio_metrics.duration)
    payload["file_size_label"] = format_file_size(report.audio_metrics.file_size)
    return payload
