"""Signal-level core: the PCM buffer type and the feature extractors.

The enhancement stages live in ``voicestudio_dsp.dsp_engine`` and share
the same ``SampleBuffer`` contract.
"""

from .buffer import InvalidBufferError, SampleBuffer

__all__ = ["InvalidBufferError", "SampleBuffer"]
