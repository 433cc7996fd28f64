"""Sample-slope de-esser.

Sibilance is approximated by the first difference of the waveform: any
sample whose step from its predecessor exceeds the threshold is ducked.
The first sample has no predecessor and is passed through.
"""
from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger("voicestudio_dsp.engine.deesser")


def deess(x: np.ndarray, sr: int, amount: float) -> np.ndarray:
  threshold = 0.3 - (amount / 100.0) * 0.2
  reduction = 1.0 - (amount / 100.0) * 0.7

  src = x.astype(np.float64)
  y = src.copy()
  hot = np.abs(np.diff(src, axis=1)) > threshold
  y[:, 1:] = np.where(hot, src[:, 1:] * reduction, src[:, 1:])

  logger.debug("[ENHANCE] de_esser amount=%.0f threshold=%.3f ducked=%d", amount, threshold, int(np.count_nonzero(hot)))
  return y.astype(np.float32)
