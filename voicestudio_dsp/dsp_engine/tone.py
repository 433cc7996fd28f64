"""Brightness / warmth tone shaping.

Brightness > 0 adds a scaled first difference (a crude high shelf);
brightness < 0 is a broadband trim. Warmth blends each sample toward the
trailing 10-sample moving average of the input (a crude low shelf),
starting at sample 11.
"""
from __future__ import annotations

import logging

import numpy as np
from scipy.signal import lfilter

logger = logging.getLogger("voicestudio_dsp.engine.tone")

WARMTH_TAPS = 10
WARMTH_START = 11


def trailing_mean(ch: np.ndarray, taps: int = WARMTH_TAPS) -> np.ndarray:
  """y[i] = mean(x[i - taps + 1 .. i]); leading values use implicit zeros."""
  return lfilter(np.full(taps, 1.0 / taps), [1.0], ch)


def apply_tone(x: np.ndarray, sr: int, brightness: float, warmth: float) -> np.ndarray:
  src = x.astype(np.float64)
  y = src.copy()

  if brightness > 0:
    gain = 1.0 + brightness / 100.0
    high = (src[:, 1:] - src[:, :-1]) * gain
    y[:, 1:] = src[:, 1:] + high * 0.3
  elif brightness < 0:
    y = src * (1.0 + brightness / 100.0)

  if warmth != 0 and src.shape[1] > WARMTH_START:
    mix = (warmth / 50.0) * 0.3
    for c in range(src.shape[0]):
      low = trailing_mean(src[c])[WARMTH_START:]
      seg = y[c, WARMTH_START:]
      y[c, WARMTH_START:] = seg + (low - seg) * mix

  logger.debug("[ENHANCE] eq brightness=%.1f warmth=%.1f", brightness, warmth)
  return y.astype(np.float32)
