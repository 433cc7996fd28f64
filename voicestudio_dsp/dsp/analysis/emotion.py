"""Heuristic emotion label from amplitude statistics.

Uses the mean absolute amplitude and its variance on channel 0. The score
tables are fixed; several pages of the studio display them as analytics,
so they must not be retuned without a product decision.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal

import logging

import numpy as np

logger = logging.getLogger("voicestudio_dsp.analysis.emotion")

Emotion = Literal["happy", "sad", "angry", "neutral", "excited"]

EMOTIONS: tuple[Emotion, ...] = ("happy", "sad", "angry", "neutral", "excited")


@dataclass
class EmotionAnalysis:
    dominant: Emotion
    confidence: float
    emotions: Dict[str, float]


def emotion_scores(energy: float, variance: float) -> Dict[str, float]:
    scores: Dict[str, float] = {name: 0.0 for name in EMOTIONS}

    if energy > 0.15 and variance > 0.02:
        scores.update(excited=70.0, happy=60.0, neutral=20.0)
    elif energy > 0.12 and variance > 0.015:
        scores.update(angry=65.0, excited=30.0, neutral=20.0)
    elif energy < 0.08:
        scores.update(sad=70.0, neutral=40.0, happy=10.0)
    else:
        scores.update(neutral=80.0, happy=30.0, sad=20.0)

    return scores


def detect_emotion(channel: np.ndarray) -> EmotionAnalysis:
    mags = np.abs(channel.astype(np.float64))
    energy = float(np.mean(mags))
    variance = float(np.mean((mags - energy) ** 2))

    scores = emotion_scores(energy, variance)

    dominant: Emotion = "neutral"
    best = 0.0
    for name in EMOTIONS:
        if scores[name] > best:
            best = scores[name]
            dominant = name

    logger.debug("[ANALYSIS] emotion energy=%.4f variance=%.4f -> %s (%.0f)", energy, variance, dominant, best)
    return EmotionAnalysis(dominant=dominant, confidence=best, emotions=scores)
