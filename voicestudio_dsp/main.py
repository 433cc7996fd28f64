from dataclasses import asdict
from typing import Any, Dict, Optional

import logging

from fastapi import FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from voicestudio_dsp.analysis import analyze_audio, build_report, compare_reports, report_to_dict
from voicestudio_dsp.dsp.buffer import InvalidBufferError
from voicestudio_dsp.engine import enhance_audio
from voicestudio_dsp.models import (
    CompareResponse,
    EnhanceResponse,
    EnhancementSettings,
    PresetListResponse,
)
from voicestudio_dsp.presets import CATEGORIES, UnknownPresetError, list_presets
from voicestudio_dsp.settings import get_settings
from voicestudio_dsp.storage import AudioDecodeError, read_audio

settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("voicestudio_dsp")

app = FastAPI(title="VoiceStudio DSP Engine")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _bad_request(error: str, exc: Exception) -> HTTPException:
    return HTTPException(status_code=400, detail={"error": error, "message": str(exc)})


@app.get("/health")
async def health():
    """Static payload so uptime checks do not exercise the DSP stack."""

    return {"status": "ok"}


@app.post("/analyze")
async def analyze(file: UploadFile = File(...)):
    """Return the analytics report (quality, spectrum, speaker, emotion) for an upload."""

    try:
        return analyze_audio(file.file)
    except AudioDecodeError as exc:
        raise _bad_request("AUDIO_DECODE_FAILED", exc) from exc
    except InvalidBufferError as exc:
        raise _bad_request("INVALID_AUDIO", exc) from exc
    finally:
        file.file.close()


@app.post("/enhance", response_model=EnhanceResponse)
async def enhance(
    file: UploadFile = File(...),
    preset: Optional[str] = Form(None),
    config: Optional[str] = Form(None),
):
    """Enhance an upload with a preset and/or explicit settings.

    ``config`` is a JSON object of enhancement knobs (camelCase or
    snake_case); any knob it sets replaces the preset's value.
    """

    overrides: Optional[Dict[str, Any]] = None
    if config:
        try:
            overrides = EnhancementSettings.model_validate_json(config).overrides()
        except ValidationError as exc:
            raise _bad_request("INVALID_CONFIG", exc) from exc

    try:
        result = enhance_audio(file.file, preset_key=preset, overrides=overrides)
    except UnknownPresetError as exc:
        raise HTTPException(status_code=404, detail={"error": "UNKNOWN_PRESET", "preset": preset}) from exc
    except AudioDecodeError as exc:
        raise _bad_request("AUDIO_DECODE_FAILED", exc) from exc
    except InvalidBufferError as exc:
        raise _bad_request("INVALID_AUDIO", exc) from exc
    except Exception as exc:  # pragma: no cover - logged and surfaced to the studio
        logger.exception("[DSP] Enhancement failed preset=%s: %s", preset, exc)
        raise HTTPException(
            status_code=500,
            detail={"error": "DSP_PROCESSING_FAILED", "message": str(exc)},
        ) from exc
    finally:
        file.file.close()

    return {"status": "processed", **result}


@app.post("/compare", response_model=CompareResponse)
async def compare(before: UploadFile = File(...), after: UploadFile = File(...)):
    """Compare two takes (e.g. raw vs enhanced) and report the score delta."""

    try:
        before_buffer, before_fmt = read_audio(before.file)
        after_buffer, after_fmt = read_audio(after.file)
    except AudioDecodeError as exc:
        raise _bad_request("AUDIO_DECODE_FAILED", exc) from exc
    except InvalidBufferError as exc:
        raise _bad_request("INVALID_AUDIO", exc) from exc
    finally:
        before.file.close()
        after.file.close()

    before_report = build_report(before_buffer, before_fmt)
    after_report = build_report(after_buffer, after_fmt)
    comparison = compare_reports(before_report, after_report)

    return {
        **asdict(comparison),
        "before": report_to_dict(before_report),
        "after": report_to_dict(after_report),
    }


@app.get("/presets", response_model=PresetListResponse)
async def presets(category: Optional[str] = Query(default=None)):
    """Return the enhancement preset catalog, optionally for one category."""

    normalized = category if category in CATEGORIES else None
    return {"presets": [asdict(p) for p in list_presets(normalized)]}  # type: ignore[arg-type]
