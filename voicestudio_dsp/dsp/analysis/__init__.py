"""Analysis layer: quality, spectral, pitch/speaker and emotion features.

Every extractor is a pure function over a ``SampleBuffer`` channel and
returns a small dataclass; ``analyze`` bundles them for one buffer.
"""

from .emotion import EmotionAnalysis
from .extractor import AnalysisResult, analyze
from .pitch import SpeakerProfile
from .quality import QualityMetrics
from .recommendations import QualityRating, generate_recommendations, quality_rating
from .spectral import SpectralAnalysis

__all__ = [
    "AnalysisResult",
    "EmotionAnalysis",
    "QualityMetrics",
    "QualityRating",
    "SpeakerProfile",
    "SpectralAnalysis",
    "analyze",
    "generate_recommendations",
    "quality_rating",
]
