"""Mixers that fold the output of several sources into one byte string."""

from randmix.mixing.base import Mixer
from randmix.mixing.hash import HashMixer
from randmix.mixing.registry import MixerRegistry
from randmix.mixing.xor import XorMixer

__all__ = [
    "HashMixer",
    "Mixer",
    "MixerRegistry",
    "XorMixer",
]
