"""Config-driven enhancement pipeline for voice recordings.

Stages run in a fixed order; each one is skipped when its knob sits at
the neutral value:

1. noise_reduction   (0..100)
2. click_removal     (0..100)
3. breath_removal    (0..100)
4. de_esser          (0..100)
5. eq                (brightness / warmth, -50..50)
6. clarity           (0..100)
7. compression       (0..100)
8. normalize         (bool)

Reordering changes the output, so the order lives in one place
(``STAGE_ORDER``). ``build_chain`` turns a config into the ordered list of
``(stage_id, params)`` that ``run_chain`` applies; callers with their own
effect chains can hand ``run_chain`` any such list.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, List, Literal, Mapping, Sequence, Tuple

import logging

import numpy as np

from ..dsp.buffer import SampleBuffer
from .analysis import QuickQuality, measure_loudness, quick_quality
from .deesser import deess
from .dynamics import compress, enhance_clarity, normalize
from .restoration import reduce_noise, remove_breaths, remove_clicks
from .tone import apply_tone

logger = logging.getLogger("voicestudio_dsp.engine.pipeline")


StageId = Literal[
  "noise_reduction",
  "click_removal",
  "breath_removal",
  "de_esser",
  "eq",
  "clarity",
  "compression",
  "normalize",
]

STAGE_ORDER: Tuple[StageId, ...] = (
  "noise_reduction",
  "click_removal",
  "breath_removal",
  "de_esser",
  "eq",
  "clarity",
  "compression",
  "normalize",
)

StageFn = Callable[..., np.ndarray]

_STAGES: Dict[str, StageFn] = {
  "noise_reduction": reduce_noise,
  "click_removal": remove_clicks,
  "breath_removal": remove_breaths,
  "de_esser": deess,
  "eq": apply_tone,
  "clarity": enhance_clarity,
  "compression": compress,
  "normalize": normalize,
}

ChainStep = Tuple[str, Dict[str, Any]]

_AMOUNT_RANGE = (0.0, 100.0)
_TONE_RANGE = (-50.0, 50.0)

# camelCase keys used by the studio frontend and the preset catalog
_CAMEL_KEYS = {
  "noiseReduction": "noise_reduction",
  "deEsser": "de_esser",
  "breathRemoval": "breath_removal",
  "clickRemoval": "click_removal",
  "compression": "compression",
  "brightness": "brightness",
  "warmth": "warmth",
  "clarity": "clarity",
  "normalize": "normalize",
}
_SNAKE_TO_CAMEL = {v: k for k, v in _CAMEL_KEYS.items()}


@dataclass
class EnhancementConfig:
  """Nine independent enhancement knobs.

  Amount knobs run 0..100, brightness and warmth -50..50. Values outside
  those ranges are clamped on construction.
  """

  noise_reduction: float = 0.0
  de_esser: float = 0.0
  breath_removal: float = 0.0
  click_removal: float = 0.0
  normalize: bool = False
  compression: float = 0.0
  brightness: float = 0.0
  warmth: float = 0.0
  clarity: float = 0.0

  def __post_init__(self) -> None:
    for f in fields(self):
      if f.name == "normalize":
        if not isinstance(self.normalize, (bool, np.bool_)):
          raise ValueError(f"Enhancement setting normalize must be a bool, got {self.normalize!r}")
        self.normalize = bool(self.normalize)
        continue
      lo, hi = _TONE_RANGE if f.name in ("brightness", "warmth") else _AMOUNT_RANGE
      raw = float(getattr(self, f.name))
      if not np.isfinite(raw):
        raise ValueError(f"Enhancement setting {f.name} must be finite, got {raw}")
      value = float(np.clip(raw, lo, hi))
      if value != raw:
        logger.warning("[ENHANCE] %s=%.2f outside [%.0f, %.0f], clamped to %.2f", f.name, raw, lo, hi, value)
      setattr(self, f.name, value)

  @classmethod
  def from_dict(cls, data: Mapping[str, Any]) -> "EnhancementConfig":
    """Build a config from snake_case or frontend camelCase keys."""
    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
      name = _CAMEL_KEYS.get(key, key)
      if name not in _SNAKE_TO_CAMEL:
        raise ValueError(f"Unknown enhancement setting: {key}")
      kwargs[name] = value
    return cls(**kwargs)

  def to_dict(self) -> Dict[str, Any]:
    return {_SNAKE_TO_CAMEL[f.name]: getattr(self, f.name) for f in fields(self)}

  def with_overrides(self, overrides: Mapping[str, Any]) -> "EnhancementConfig":
    """Copy of this config with the given knobs replaced."""
    merged = self.to_dict()
    for key, value in overrides.items():
      name = _CAMEL_KEYS.get(key, key)
      if name not in _SNAKE_TO_CAMEL:
        raise ValueError(f"Unknown enhancement setting: {key}")
      merged[_SNAKE_TO_CAMEL[name]] = value
    return EnhancementConfig.from_dict(merged)

  def is_neutral(self) -> bool:
    return not build_chain(self)


@dataclass
class EnhancementReport:
  processing_chain: List[str]
  parameter_values: Dict[str, float]
  before: QuickQuality
  after: QuickQuality
  loudness_before: float
  loudness_after: float
  true_peak_after: float
  notes: List[str] = field(default_factory=list)


def build_chain(config: EnhancementConfig) -> List[ChainStep]:
  chain: List[ChainStep] = []
  if config.noise_reduction > 0:
    chain.append(("noise_reduction", {"amount": config.noise_reduction}))
  if config.click_removal > 0:
    chain.append(("click_removal", {"amount": config.click_removal}))
  if config.breath_removal > 0:
    chain.append(("breath_removal", {"amount": config.breath_removal}))
  if config.de_esser > 0:
    chain.append(("de_esser", {"amount": config.de_esser}))
  if config.brightness != 0 or config.warmth != 0:
    chain.append(("eq", {"brightness": config.brightness, "warmth": config.warmth}))
  if config.clarity > 0:
    chain.append(("clarity", {"amount": config.clarity}))
  if config.compression > 0:
    chain.append(("compression", {"amount": config.compression}))
  if config.normalize:
    chain.append(("normalize", {}))
  return chain


def run_chain(buffer: SampleBuffer, chain: Sequence[ChainStep]) -> SampleBuffer:
  """Apply ``chain`` in order and return a new buffer.

  Raises:
    InvalidBufferError: if ``buffer`` is not well formed.
    ValueError: for an unknown stage id.
  """
  buffer.validate()

  for stage_id, _ in chain:
    if stage_id not in _STAGES:
      raise ValueError(f"Unsupported enhancement stage: {stage_id}")

  x = buffer.samples
  for stage_id, params in chain:
    x = _STAGES[stage_id](x, buffer.sample_rate, **params)

  return buffer.with_samples(np.asarray(x, dtype=np.float32))


def enhance(buffer: SampleBuffer, config: EnhancementConfig) -> SampleBuffer:
  chain = build_chain(config)
  out = run_chain(buffer, chain)
  logger.info(
    "[ENHANCE] channels=%d samples=%d sr=%d chain=%s",
    buffer.num_channels,
    buffer.num_samples,
    buffer.sample_rate,
    ",".join(stage for stage, _ in chain) or "none",
  )
  return out


def enhance_with_report(buffer: SampleBuffer, config: EnhancementConfig) -> tuple[SampleBuffer, EnhancementReport]:
  """Enhance ``buffer`` and measure it before and after."""
  chain = build_chain(config)
  loud_before = measure_loudness(buffer)
  before = quick_quality(buffer)

  out = enhance(buffer, config)

  loud_after = measure_loudness(out)
  after = quick_quality(out)

  params: Dict[str, float] = {}
  for stage_id, stage_params in chain:
    for key, value in stage_params.items():
      params[f"{stage_id}_{key}"] = float(value)

  notes: List[str] = []
  if not chain:
    notes.append("No enhancement stages enabled; output equals input.")

  report = EnhancementReport(
    processing_chain=[stage for stage, _ in chain],
    parameter_values=params,
    before=before,
    after=after,
    loudness_before=loud_before.integrated_lufs,
    loudness_after=loud_after.integrated_lufs,
    true_peak_after=loud_after.true_peak_dbfs,
    notes=notes,
  )
  return out, report
