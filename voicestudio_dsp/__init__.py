"""VoiceStudio DSP: voice analysis and enhancement.

The two core calls are ``analyze(buffer)`` and ``enhance(buffer, config)``;
the FastAPI service in ``voicestudio_dsp.main`` wraps them for uploads.
"""

from voicestudio_dsp.dsp.analysis import AnalysisResult, analyze
from voicestudio_dsp.dsp.buffer import InvalidBufferError, SampleBuffer
from voicestudio_dsp.dsp_engine import EnhancementConfig, build_chain, enhance, run_chain

__all__ = [
    "AnalysisResult",
    "EnhancementConfig",
    "InvalidBufferError",
    "SampleBuffer",
    "analyze",
    "build_chain",
    "enhance",
    "run_chain",
]
