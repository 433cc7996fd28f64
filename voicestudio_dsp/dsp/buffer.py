"""PCM sample buffer shared by the analysis and enhancement layers.

A ``SampleBuffer`` is an immutable ``[channels, samples]`` float32 array
plus its sample rate. Every transform in the engine returns a new buffer;
the backing array is marked read-only so accidental in-place edits fail
loudly instead of leaking between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

ChannelsLike = Union[np.ndarray, Sequence[Sequence[float]], Sequence[float]]

# entry bound: +24 dBFS over full scale
MAX_SAMPLE_MAGNITUDE = 16.0


class InvalidBufferError(ValueError):
    """Raised when audio handed to the core is not a well-formed PCM buffer."""


def _as_channel_matrix(channels: ChannelsLike) -> np.ndarray:
    if isinstance(channels, np.ndarray):
        arr = channels
    else:
        try:
            lengths = {len(ch) for ch in channels}  # type: ignore[arg-type]
        except TypeError:
            # flat sequence of floats -> mono
            arr = np.asarray(channels, dtype=np.float64)
        else:
            if len(lengths) > 1:
                raise InvalidBufferError(f"Channels have mismatched lengths: {sorted(lengths)}")
            arr = np.asarray(channels, dtype=np.float64)

    if arr.ndim == 1:
        arr = arr[np.newaxis, :]
    if arr.ndim != 2:
        raise InvalidBufferError(f"Expected mono [N] or multichannel [C, N] audio, got shape {arr.shape}")
    return arr


def validate_samples(
    samples: np.ndarray,
    sample_rate: int,
    max_magnitude: Optional[float] = MAX_SAMPLE_MAGNITUDE,
) -> None:
    """Check the invariants every buffer entering the core must satisfy.

    Nominal audio lives in [-1, 1]; decoded float files may run hot, so
    entry allows up to ``max_magnitude``. Stage outputs are only checked for
    shape and finiteness (``max_magnitude=None``).
    """

    if not isinstance(sample_rate, (int, np.integer)) or isinstance(sample_rate, bool):
        raise InvalidBufferError(f"Sample rate must be an integer, got {sample_rate!r}")
    if sample_rate <= 0:
        raise InvalidBufferError(f"Sample rate must be positive, got {sample_rate}")
    if samples.ndim != 2:
        raise InvalidBufferError(f"Expected [C, N] samples, got shape {samples.shape}")
    if samples.shape[0] == 0:
        raise InvalidBufferError("Buffer has no channels")
    if samples.shape[1] == 0:
        raise InvalidBufferError("Buffer is empty")
    if not np.all(np.isfinite(samples)):
        raise InvalidBufferError("Buffer contains NaN or infinite samples")
    if max_magnitude is not None:
        peak = float(np.max(np.abs(samples)))
        if peak > max_magnitude:
            raise InvalidBufferError(
                f"Sample magnitude {peak:.3g} exceeds {max_magnitude:g}; expected audio in [-1, 1]"
            )


@dataclass(frozen=True, eq=False)
class SampleBuffer:
    """Decoded audio: ``samples`` is a read-only float32 array ``[C, N]``."""

    samples: np.ndarray
    sample_rate: int

    @classmethod
    def from_channels(cls, channels: ChannelsLike, sample_rate: int) -> "SampleBuffer":
        """Build a validated buffer from a 1-D array, ``[C, N]`` array or per-channel lists.

        The data is always copied, so later edits to ``channels`` never reach
        the buffer.
        """

        arr = _as_channel_matrix(channels)
        validate_samples(arr, sample_rate)
        data = np.array(arr, dtype=np.float32, copy=True)
        data.setflags(write=False)
        return cls(samples=data, sample_rate=int(sample_rate))

    def with_samples(self, samples: np.ndarray) -> "SampleBuffer":
        """Return a new buffer at the same sample rate holding ``samples``."""

        if samples.shape != self.samples.shape:
            raise InvalidBufferError(
                f"Transform changed buffer shape from {self.samples.shape} to {samples.shape}"
            )
        validate_samples(samples, self.sample_rate, max_magnitude=None)
        data = np.array(samples, dtype=np.float32, copy=True)
        data.setflags(write=False)
        return SampleBuffer(samples=data, sample_rate=self.sample_rate)

    def validate(self) -> None:
        validate_samples(self.samples, self.sample_rate)

    @property
    def num_channels(self) -> int:
        return int(self.samples.shape[0])

    @property
    def num_samples(self) -> int:
        return int(self.samples.shape[1])

    @property
    def duration(self) -> float:
        return self.num_samples / float(self.sample_rate)

    def channel(self, index: int = 0) -> np.ndarray:
        return self.samples[index]

    def mono(self) -> np.ndarray:
        """Mean downmix across channels as float64."""
        return self.samples.astype(np.float64).mean(axis=0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SampleBuffer):
            return NotImplemented
        return self.sample_rate == other.sample_rate and np.array_equal(self.samples, other.samples)

