"""Before/after measurements used by the enhancement engine.

This keeps pyloudnorm isolated to measurement only so the stage code in
this package stays plain numpy.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import logging

import numpy as np
import pyloudnorm as pyln

from ..dsp.buffer import SampleBuffer

logger = logging.getLogger("voicestudio_dsp.engine.analysis")


@dataclass
class LoudnessStats:
  integrated_lufs: float
  true_peak_dbfs: float


@dataclass
class QuickQuality:
  rms: float
  peak: float
  dynamic_range_db: float
  noise_floor_db: float


@lru_cache(maxsize=64)
def _meter_for_sr(sr: int) -> pyln.Meter:
  return pyln.Meter(sr)


def measure_loudness(buffer: SampleBuffer) -> LoudnessStats:
  mono = buffer.mono()
  rms = float(np.sqrt(np.mean(np.square(mono))))
  try:
    integrated = float(_meter_for_sr(buffer.sample_rate).integrated_loudness(mono))
  except ValueError as exc:
    # clips shorter than one 400 ms gating block
    logger.debug("[DSP] LUFS measurement unavailable (%s), using RMS", exc)
    integrated = float("-inf")

  if not np.isfinite(integrated):
    # Fallback: RMS-based approximation
    integrated = 20.0 * np.log10(max(rms, 1e-6))

  peak = float(np.max(np.abs(mono)) + 1e-9)
  true_peak_dbfs = 20.0 * np.log10(peak)
  return LoudnessStats(integrated_lufs=float(integrated), true_peak_dbfs=float(true_peak_dbfs))


def quick_quality(buffer: SampleBuffer) -> QuickQuality:
  """Cheap level summary of channel 0 shown next to the enhancement controls.

  ``min`` is the quietest magnitude above -60 dBFS (0.001); when nothing
  is that loud the floor is taken as 0.001.
  """
  x = buffer.channel(0).astype(np.float64)
  mags = np.abs(x)
  rms = float(np.sqrt(np.mean(x ** 2)))
  peak = float(np.max(mags))

  audible = mags[mags > 0.001]
  floor = float(np.min(audible)) if audible.size else 0.001

  return QuickQuality(
    rms=rms,
    peak=peak,
    dynamic_range_db=float(20.0 * np.log10(max(peak, 1e-12) / floor)),
    noise_floor_db=float(20.0 * np.log10(floor)),
  )
