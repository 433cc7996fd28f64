"""Restoration stages: noise reduction, click removal, breath removal.

All three take a ``[channels, samples]`` array and a 0..100 amount and
return a new float32 array of the same shape. They are deliberately
simple time-domain approximations; the thresholds are part of the
product behaviour and stay fixed.
"""
from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger("voicestudio_dsp.engine.restoration")

BREATH_WINDOW_SECONDS = 0.05


def noise_threshold_linear(amount: float) -> float:
  """Gate threshold: -40 dB at amount 0 down to -60 dB at amount 100."""
  threshold_db = -40.0 - 0.2 * amount
  return float(10 ** (threshold_db / 20.0))


def noise_profile(reference: np.ndarray, amount: float) -> np.ndarray:
  """Keep only the sub-threshold ("quiet") samples of ``reference``."""
  ref = reference.astype(np.float64)
  return np.where(np.abs(ref) < noise_threshold_linear(amount), ref, 0.0)


def reduce_noise(x: np.ndarray, sr: int, amount: float) -> np.ndarray:
  """Subtract the channel-0 noise profile, scaled by amount/100, from every channel."""
  profile = noise_profile(x[0], amount)
  strength = amount / 100.0
  y = x.astype(np.float64) - profile[np.newaxis, :] * strength
  logger.debug("[ENHANCE] noise_reduction amount=%.0f profiled=%d samples", amount, int(np.count_nonzero(profile)))
  return y.astype(np.float32)


def _declick_channel(ch: np.ndarray, window: int, threshold: float) -> tuple[np.ndarray, int]:
  n = ch.shape[0]
  out = ch.copy()
  jumps = np.nonzero(np.abs(np.diff(ch)) > threshold)[0] + 1
  for i in jumps:
    # window is taken from the untouched input, not from earlier repairs
    neighbourhood = np.sort(ch[max(0, i - window) : min(n, i + window)])
    out[i] = neighbourhood[neighbourhood.shape[0] // 2]
  return out, int(jumps.shape[0])


def remove_clicks(x: np.ndarray, sr: int, amount: float) -> np.ndarray:
  """Median-filter samples that jump by more than the click threshold."""
  window = int(np.floor(3 + (amount / 100.0) * 7))
  threshold = 0.1 + (amount / 100.0) * 0.4

  src = x.astype(np.float64)
  y = np.empty_like(src)
  repaired = 0
  for c in range(src.shape[0]):
    y[c], count = _declick_channel(src[c], window, threshold)
    repaired += count

  logger.debug("[ENHANCE] click_removal amount=%.0f window=%d repaired=%d", amount, window, repaired)
  return y.astype(np.float32)


def local_energy(ch: np.ndarray, window: int) -> np.ndarray:
  """sqrt(sum(x[i-window : i+window]^2) / window) for every sample position."""
  n = ch.shape[0]
  csum = np.concatenate(([0.0], np.cumsum(ch.astype(np.float64) ** 2)))
  idx = np.arange(n)
  lo = np.maximum(0, idx - window)
  hi = np.minimum(n, idx + window)
  sums = np.maximum(csum[hi] - csum[lo], 0.0)
  return np.sqrt(sums / window)


def remove_breaths(x: np.ndarray, sr: int, amount: float) -> np.ndarray:
  """Attenuate low-energy stretches (breaths, room tone) by ``1 - amount/100``."""
  window = max(1, int(np.floor(sr * BREATH_WINDOW_SECONDS)))
  threshold = 0.02 + (amount / 100.0) * 0.08
  gain = 1.0 - amount / 100.0

  src = x.astype(np.float64)
  y = src.copy()
  for c in range(src.shape[0]):
    quiet = local_energy(src[c], window) < threshold
    y[c, quiet] = src[c, quiet] * gain

  logger.debug("[ENHANCE] breath_removal amount=%.0f window=%d threshold=%.3f", amount, window, threshold)
  return y.astype(np.float32)
