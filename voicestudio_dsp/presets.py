"""Enhancement preset catalog.

Presets are plain data: a name, a category and the nine knob values of
an ``EnhancementConfig``. The engine never reads this table itself; the
service looks a preset up and hands the resulting config to ``enhance``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional

import logging

from voicestudio_dsp.dsp_engine import EnhancementConfig

logger = logging.getLogger("voicestudio_dsp.presets")

PresetCategory = Literal["restore", "enhance", "master", "voice"]

CATEGORIES: tuple[PresetCategory, ...] = ("restore", "enhance", "master", "voice")


class UnknownPresetError(KeyError):
    """Raised when a preset id is not in the catalog."""


@dataclass(frozen=True)
class EnhancementPreset:
    """User-facing enhancement preset.

    key:         Stable preset id used by the studio (kebab-case).
    name:        Human-readable label for UI.
    category:    restore | enhance | master | voice.
    description: Short UX description.
    settings:    camelCase knob values, as stored by the frontend.
    """

    key: str
    name: str
    category: PresetCategory
    description: str
    settings: Dict[str, Any]

    def to_config(self) -> EnhancementConfig:
        return EnhancementConfig.from_dict(self.settings)


def _settings(
    noise: float,
    de_ess: float,
    breath: float,
    click: float,
    compression: float,
    brightness: float,
    warmth: float,
    clarity: float,
    normalize: bool = True,
) -> Dict[str, Any]:
    return {
        "noiseReduction": noise,
        "deEsser": de_ess,
        "breathRemoval": breath,
        "clickRemoval": click,
        "normalize": normalize,
        "compression": compression,
        "brightness": brightness,
        "warmth": warmth,
        "clarity": clarity,
    }


ENHANCEMENT_PRESETS: List[EnhancementPreset] = [
    # Restoration
    EnhancementPreset(
        key="clean-speech",
        name="Clean Speech",
        category="restore",
        description="Remove background noise from speech recordings",
        settings=_settings(70, 30, 40, 50, 40, 5, 0, 60),
    ),
    EnhancementPreset(
        key="podcast-cleanup",
        name="Podcast Cleanup",
        category="restore",
        description="Professional podcast audio restoration",
        settings=_settings(60, 40, 50, 60, 50, 10, 5, 70),
    ),
    EnhancementPreset(
        key="remove-hiss",
        name="Remove Hiss",
        category="restore",
        description="Eliminate tape hiss and white noise",
        settings=_settings(85, 20, 20, 30, 30, -5, 0, 50),
    ),
    EnhancementPreset(
        key="declicker",
        name="De-Clicker",
        category="restore",
        description="Remove clicks, pops, and mouth sounds",
        settings=_settings(30, 50, 60, 90, 35, 0, 0, 50),
    ),
    # Enhancement
    EnhancementPreset(
        key="voice-enhance",
        name="Voice Enhance",
        category="enhance",
        description="Boost vocal clarity and presence",
        settings=_settings(40, 35, 30, 40, 45, 15, 10, 80),
    ),
    EnhancementPreset(
        key="radio-ready",
        name="Radio Ready",
        category="enhance",
        description="Broadcast-quality vocal processing",
        settings=_settings(50, 45, 40, 50, 60, 20, 15, 85),
    ),
    EnhancementPreset(
        key="warm-voice",
        name="Warm Voice",
        category="enhance",
        description="Add warmth and richness to vocals",
        settings=_settings(45, 30, 25, 35, 40, -5, 25, 60),
    ),
    EnhancementPreset(
        key="crystal-clear",
        name="Crystal Clear",
        category="enhance",
        description="Maximum clarity and articulation",
        settings=_settings(55, 40, 35, 45, 50, 25, 0, 90),
    ),
    # Mastering
    EnhancementPreset(
        key="audiobook-master",
        name="Audiobook Master",
        category="master",
        description="ACX-compliant audiobook mastering",
        settings=_settings(65, 45, 55, 60, 55, 8, 12, 75),
    ),
    EnhancementPreset(
        key="youtube-optimize",
        name="YouTube Optimize",
        category="master",
        description="Optimized for YouTube content",
        settings=_settings(50, 40, 45, 50, 60, 15, 10, 80),
    ),
    EnhancementPreset(
        key="streaming-master",
        name="Streaming Master",
        category="master",
        description="Professional streaming audio",
        settings=_settings(60, 50, 50, 55, 65, 18, 8, 85),
    ),
    # Voice-specific
    EnhancementPreset(
        key="male-voice",
        name="Male Voice Optimize",
        category="voice",
        description="Optimized for male vocals",
        settings=_settings(50, 35, 40, 45, 50, 5, 20, 70),
    ),
    EnhancementPreset(
        key="female-voice",
        name="Female Voice Optimize",
        category="voice",
        description="Optimized for female vocals",
        settings=_settings(50, 50, 35, 45, 45, 15, 10, 75),
    ),
]

_BY_KEY: Dict[str, EnhancementPreset] = {p.key: p for p in ENHANCEMENT_PRESETS}


def list_presets(category: Optional[PresetCategory] = None) -> List[EnhancementPreset]:
    """Return all presets, optionally filtered by category."""

    if category is None:
        return list(ENHANCEMENT_PRESETS)
    return [p for p in ENHANCEMENT_PRESETS if p.category == category]


def get_preset(key: str) -> EnhancementPreset:
    try:
        return _BY_KEY[key]
    except KeyError:
        logger.info("[PRESETS] Unknown preset requested: %s", key)
        raise UnknownPresetError(key) from None


def default_config() -> EnhancementConfig:
    """All knobs neutral: enhancing with it returns the input unchanged."""

    return EnhancementConfig()
