import logging
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

import numpy as np
import soundfile as sf

from voicestudio_dsp.dsp.buffer import InvalidBufferError, SampleBuffer
from voicestudio_dsp.settings import get_settings

logger = logging.getLogger("voicestudio_dsp.storage")


class AudioDecodeError(ValueError):
    """Raised when an uploaded file cannot be decoded as audio."""


def read_audio(fileobj: BinaryIO, max_seconds: Optional[float] = None) -> tuple[SampleBuffer, str]:
    """Decode an uploaded file into a ``SampleBuffer``.

    Returns the buffer and the container format reported by libsndfile
    (e.g. ``wav``, ``flac``) so reports can echo it back.
    """

    try:
        info = sf.info(fileobj)
        fileobj.seek(0)
        audio, sr = sf.read(fileobj, dtype="float32", always_2d=True)
    except RuntimeError as exc:
        raise AudioDecodeError(f"Failed to read audio: {exc}") from exc

    limit = max_seconds if max_seconds is not None else get_settings().max_upload_seconds
    if audio.shape[0] > limit * sr:
        raise InvalidBufferError(f"Audio is longer than the {limit:.0f} s upload limit")

    # soundfile gives [frames, channels]; the core works on [channels, frames]
    buffer = SampleBuffer.from_channels(np.ascontiguousarray(audio.T), int(sr))
    return buffer, str(info.format).lower()


def save_wav(buffer: SampleBuffer, *, prefix: str = "enhanced", output_dir: Optional[str] = None) -> str:
    """Write ``buffer`` as 16-bit PCM WAV and return the local path."""

    directory = Path(output_dir or get_settings().output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{prefix}_{uuid.uuid4().hex}.wav"

    sf.write(str(path), buffer.samples.T, buffer.sample_rate, subtype="PCM_16")
    logger.info("[DSP] Wrote %s (%.2f s, %d ch)", path, buffer.duration, buffer.num_channels)
    return str(path)
