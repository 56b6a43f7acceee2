"""
Audio cues.

Simulations never play sound themselves: each step reports the Tones it
wants and the host hands them to an AudioPort. Implementations must
never raise into the simulation; failures are logged and dropped.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np
import pygame

from retroverse.logging import get_logger

log = get_logger('audio')


class Waveform(Enum):
    SINE = "sine"
    SQUARE = "square"
    TRIANGLE = "triangle"
    SAWTOOTH = "sawtooth"


@dataclass(frozen=True)
class Tone:
    """A single fire-and-forget tone request.

    Attributes:
        frequency_hz: Pitch in Hz (positive)
        duration_s: Length in seconds (positive)
        waveform: Oscillator shape
    """
    frequency_hz: float
    duration_s: float
    waveform: Waveform = Waveform.SINE

    def __post_init__(self):
        if self.frequency_hz <= 0:
            raise ValueError(f'Frequency must be positive, got {self.frequency_hz}')
        if self.duration_s <= 0:
            raise ValueError(f'Duration must be positive, got {self.duration_s}')


class AudioPort(ABC):
    """Fire-and-forget tone playback."""

    @abstractmethod
    def play_tone(self, frequency_hz: float, duration_s: float,
                  waveform: Waveform = Waveform.SINE) -> None:
        """Start a tone and return immediately. Must not raise."""
        pass

    def play(self, tone: Tone) -> None:
        self.play_tone(tone.frequency_hz, tone.duration_s, tone.waveform)


class NullAudio(AudioPort):
    """Silent port; records requests for inspection in tests."""

    def __init__(self):
        self.played: List[Tone] = []

    def play_tone(self, frequency_hz: float, duration_s: float,
                  waveform: Waveform = Waveform.SINE) -> None:
        self.played.append(Tone(frequency_hz, duration_s, waveform))


def synthesize(frequency_hz: float, duration_s: float, waveform: Waveform,
               sample_rate: int = 22050, volume: float = 0.3) -> np.ndarray:
    """Render a tone to int16 mono samples with a short fade in and out.

    Args:
        frequency_hz: Pitch in Hz
        duration_s: Length in seconds
        waveform: Oscillator shape
        sample_rate: Samples per second
        volume: Peak amplitude as a fraction of full scale

    Returns:
        1-D int16 array of samples
    """
    num_samples = max(1, int(sample_rate * duration_s))
    t = np.linspace(0, duration_s, num_samples, False)
    phase = frequency_hz * t

    if waveform == Waveform.SQUARE:
        wave = np.sign(np.sin(2.0 * np.pi * phase))
    elif waveform == Waveform.TRIANGLE:
        wave = 2.0 * np.abs(2.0 * (phase - np.floor(phase + 0.5))) - 1.0
    elif waveform == Waveform.SAWTOOTH:
        wave = 2.0 * (phase - np.floor(phase + 0.5))
    else:
        wave = np.sin(2.0 * np.pi * phase)

    # Fade to avoid clicks
    envelope = np.ones(num_samples)
    fade_samples = min(int(0.01 * sample_rate), num_samples // 2)
    if fade_samples > 0:
        envelope[:fade_samples] = np.linspace(0, 1, fade_samples)
        envelope[-fade_samples:] = np.linspace(1, 0, fade_samples)

    return (wave * envelope * 32767 * volume).astype(np.int16)


class PygameToneAudio(AudioPort):
    """Synthesizes tones with numpy and plays them through pygame.mixer.

    Generated sounds are cached per (frequency, duration, waveform), so
    repeated cues cost one array build. If the mixer cannot be
    initialized the port disables itself and stays silent.
    """

    def __init__(self, enabled: bool = True, volume: float = 0.3, sample_rate: int = 22050):
        self.enabled = enabled
        self.volume = volume
        self.sample_rate = sample_rate
        self._channels = 2
        self._cache: Dict[Tuple[float, float, Waveform], Optional[pygame.mixer.Sound]] = {}
        if self.enabled:
            self._init_mixer()

    def _init_mixer(self) -> None:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=2, buffer=512)
            init = pygame.mixer.get_init()
            if init:
                self.sample_rate, _, self._channels = init
        except Exception as e:
            log.warning(f"Audio initialization failed, sound disabled: {e}")
            self.enabled = False

    def _make_sound(self, key: Tuple[float, float, Waveform]) -> Optional[pygame.mixer.Sound]:
        frequency_hz, duration_s, waveform = key
        try:
            wave = synthesize(frequency_hz, duration_s, waveform,
                              sample_rate=self.sample_rate, volume=self.volume)
            if self._channels > 1:
                wave = np.column_stack([wave] * self._channels)
            return pygame.sndarray.make_sound(wave)
        except Exception as e:
            log.warning(f"Could not synthesize {waveform.value} {frequency_hz}Hz: {e}")
            return None

    def play_tone(self, frequency_hz: float, duration_s: float,
                  waveform: Waveform = Waveform.SINE) -> None:
        if not self.enabled:
            return
        key = (float(frequency_hz), float(duration_s), waveform)
        if key not in self._cache:
            self._cache[key] = self._make_sound(key)
        sound = self._cache[key]
        if sound is None:
            return
        try:
            sound.play()
        except Exception as e:
            log.warning(f"Could not play tone: {e}")
