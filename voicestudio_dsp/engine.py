from dataclasses import asdict
from typing import Any, BinaryIO, Dict, Mapping, Optional

import logging

from voicestudio_dsp.dsp_engine import EnhancementConfig, enhance_with_report
from voicestudio_dsp.presets import get_preset
from voicestudio_dsp.storage import read_audio, save_wav

logger = logging.getLogger("voicestudio_dsp.engine")


def resolve_config(preset_key: Optional[str] = None, overrides: Optional[Mapping[str, Any]] = None) -> EnhancementConfig:
    """Start from a preset (or all-neutral) and replace the knobs in ``overrides``.

    Overrides may use snake_case or the frontend's camelCase keys.
    """

    base = get_preset(preset_key).to_config() if preset_key else EnhancementConfig()
    if overrides:
        return base.with_overrides(overrides)
    return base


def enhance_audio(
    fileobj: BinaryIO,
    preset_key: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    output_dir: Optional[str] = None,
    max_seconds: Optional[float] = None,
) -> Dict[str, Any]:
    """Decode an upload, run the enhancement pipeline and write a WAV.

    - Resolves the config from the preset and per-knob overrides
    - Runs the fixed-order stage chain
    - Writes the result next to other rendered outputs and returns its path
      together with the before/after report
    """

    config = resolve_config(preset_key, overrides)
    buffer, fmt = read_audio(fileobj, max_seconds=max_seconds)

    enhanced, report = enhance_with_report(buffer, config)
    out_path = save_wav(enhanced, output_dir=output_dir)

    logger.info(
        "[ENHANCE] preset=%s chain=%s lufs %.1f -> %.1f",
        preset_key or "custom",
        ",".join(report.processing_chain) or "none",
        report.loudness_before,
        report.loudness_after,
    )

    return {
        "output_file": out_path,
        "input_format": fmt,
        "preset": preset_key,
        "config": config.to_dict(),
        "report": asdict(report),
    }
