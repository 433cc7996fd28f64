"""Level stages: clarity boost, soft compression and peak normalisation."""
from __future__ import annotations

from dataclasses import dataclass

import logging

import numpy as np

logger = logging.getLogger("voicestudio_dsp.engine.dynamics")


def enhance_clarity(x: np.ndarray, sr: int, amount: float) -> np.ndarray:
  """Up to +30% gain (at amount 100), hard-clipped to the -1..1 range."""
  strength = amount / 100.0
  y = x.astype(np.float64) * (1.0 + strength * 0.3)
  return np.clip(y, -1.0, 1.0).astype(np.float32)


@dataclass
class SoftCompressor:
  """Static compressor on instantaneous sample magnitude.

  Ratio runs from 1:1 at amount 0 to 4:1 at amount 100, so it can never
  drop below 1.
  """

  amount: float
  threshold: float = 0.3

  @property
  def ratio(self) -> float:
    return 1.0 + (self.amount / 100.0) * 3.0

  def process(self, x: np.ndarray) -> np.ndarray:
    src = x.astype(np.float64)
    mag = np.abs(src)
    over = mag > self.threshold
    compressed = np.sign(src) * (self.threshold + (mag - self.threshold) / self.ratio)
    y = np.where(over, compressed, src)
    logger.debug(
      "[ENHANCE] compression ratio=%.2f:1 over_threshold=%d",
      self.ratio,
      int(np.count_nonzero(over)),
    )
    return y.astype(np.float32)


def compress(x: np.ndarray, sr: int, amount: float) -> np.ndarray:
  return SoftCompressor(amount=amount).process(x)


@dataclass
class PeakNormalizer:
  target: float = 0.95

  def process(self, x: np.ndarray) -> np.ndarray:
    src = x.astype(np.float64)
    peak = float(np.max(np.abs(src)))
    if peak <= 0.0:
      # silent input: nothing to scale
      return src.astype(np.float32)
    gain = self.target / peak
    logger.debug("[ENHANCE] normalize peak=%.4f gain=%.3f", peak, gain)
    return (src * gain).astype(np.float32)


def normalize(x: np.ndarray, sr: int, enabled: bool = True) -> np.ndarray:
  if not enabled:
    return x.astype(np.float32)
  return PeakNormalizer().process(x)
