"""Tests for MixedEntropySource."""

from __future__ import annotations

import threading

import pytest

from randmix.config import RandMixConfig
from randmix.entropy.base import EntropySource, validate_size
from randmix.entropy.counter import MonotonicCounter
from randmix.entropy.fallback import FallbackEntropySource
from randmix.entropy.microtime import MicroTimeSource
from randmix.entropy.mixed import MixedEntropySource
from randmix.entropy.system import SystemEntropySource
from randmix.exceptions import EntropyUnavailableError, InvalidArgumentError
from randmix.mixing.hash import HashMixer
from randmix.mixing.xor import XorMixer
from randmix.strength import Strength


class _PatternSource(EntropySource):
    """Returns a fixed byte; records calls and concurrent entries."""

    def __init__(
        self,
        pattern: int,
        strength: Strength,
        available: bool = True,
        fail: bool = False,
    ) -> None:
        self._pattern = pattern
        self._strength = strength
        self._available = available
        self._fail = fail
        self.calls = 0
        self.closed = False

    @property
    def name(self) -> str:
        return f"p{self._pattern:02x}"

    @property
    def is_available(self) -> bool:
        return self._available

    def report_strength(self) -> Strength:
        return self._strength

    def generate(self, size: int) -> bytes:
        validate_size(size)
        self.calls += 1
        if self._fail:
            raise EntropyUnavailableError("down")
        return bytes([self._pattern]) * size

    def close(self) -> None:
        self.closed = True


class TestMixedEntropySource:
    def test_requires_a_source(self) -> None:
        with pytest.raises(InvalidArgumentError):
            MixedEntropySource([], HashMixer())

    def test_sources_ordered_weakest_first(self) -> None:
        high = _PatternSource(0x01, Strength.HIGH)
        low = _PatternSource(0x02, Strength.LOW)
        medium = _PatternSource(0x03, Strength.MEDIUM)
        mixed = MixedEntropySource([high, low, medium], XorMixer())
        assert mixed.sources == [low, medium, high]
        assert mixed.name == "xor(p02,p03,p01)"

    def test_strength_is_strongest_source_capped_by_mixer(self) -> None:
        weak = _PatternSource(0x01, Strength.VERY_LOW)
        strong = _PatternSource(0x02, Strength.HIGH)
        assert MixedEntropySource([weak, strong], HashMixer()).report_strength() is Strength.MEDIUM
        assert MixedEntropySource([weak, strong], XorMixer()).report_strength() is Strength.LOW
        assert MixedEntropySource([weak], HashMixer()).report_strength() is Strength.VERY_LOW

    def test_mixes_every_source(self) -> None:
        a = _PatternSource(0x0F, Strength.LOW)
        b = _PatternSource(0xF0, Strength.LOW)
        mixed = MixedEntropySource([a, b], XorMixer())
        assert mixed.generate(5) == b"\xff" * 5
        assert a.calls == 1
        assert b.calls == 1

    def test_skips_unavailable_source_when_rating_is_still_backed(self) -> None:
        down = _PatternSource(0x0F, Strength.HIGH, available=False)
        up = _PatternSource(0xF0, Strength.LOW)
        mixed = MixedEntropySource([down, up], XorMixer())
        assert mixed.report_strength() is Strength.LOW
        assert mixed.is_available is True
        assert mixed.generate(3) == b"\xf0" * 3
        assert down.calls == 0

    def test_skips_failing_weaker_source(self) -> None:
        failing = _PatternSource(0x0F, Strength.VERY_LOW, fail=True)
        strong = _PatternSource(0xF0, Strength.HIGH)
        mixed = MixedEntropySource([failing, strong], XorMixer())
        assert mixed.generate(3) == b"\xf0" * 3
        assert failing.calls == 1

    def test_failing_strong_source_is_not_masked_by_weak_output(self) -> None:
        strong = _PatternSource(0x0F, Strength.HIGH, fail=True)
        mixed = MixedEntropySource(
            [MicroTimeSource(config=RandMixConfig(microtime_gc_jitter=False)), strong],
            HashMixer(),
        )
        assert mixed.report_strength() is Strength.MEDIUM
        with pytest.raises(EntropyUnavailableError, match="medium or stronger"):
            mixed.generate(32)
        assert strong.calls == 1

    def test_unavailable_strong_source_makes_mix_unavailable(self) -> None:
        weak = _PatternSource(0x01, Strength.VERY_LOW)
        strong = _PatternSource(0x02, Strength.MEDIUM, available=False)
        mixed = MixedEntropySource([weak, strong], HashMixer())
        assert mixed.is_available is False
        with pytest.raises(EntropyUnavailableError):
            mixed.generate(8)

    def test_fallback_takes_over_when_strong_source_fails(self) -> None:
        weak = _PatternSource(0x01, Strength.VERY_LOW)
        strong = _PatternSource(0x02, Strength.HIGH, fail=True)
        mixed = MixedEntropySource([weak, strong], HashMixer())
        source = FallbackEntropySource(mixed, SystemEntropySource())
        assert len(source.generate(16)) == 16
        assert source.used_fallback is True

    def test_raises_when_nothing_available(self) -> None:
        mixed = MixedEntropySource(
            [_PatternSource(0x01, Strength.LOW, fail=True)], HashMixer()
        )
        with pytest.raises(EntropyUnavailableError):
            mixed.generate(8)

    def test_zero_and_negative_size(self) -> None:
        a = _PatternSource(0x01, Strength.LOW)
        mixed = MixedEntropySource([a], HashMixer())
        assert mixed.generate(0) == b""
        with pytest.raises(InvalidArgumentError):
            mixed.generate(-1)
        assert a.calls == 0

    def test_real_sources(self) -> None:
        mixed = MixedEntropySource([SystemEntropySource(), MicroTimeSource()], HashMixer())
        assert mixed.report_strength() is Strength.MEDIUM
        for n in (1, 63, 64, 65, 200):
            assert len(mixed.generate(n)) == n

    def test_concurrent_calls_serialize_child_access(self) -> None:
        """A non-thread-safe child is never entered twice at once."""
        active = 0
        overlap = False
        guard = threading.Lock()
        counter = MonotonicCounter(0)
        inner = MicroTimeSource(config=RandMixConfig(microtime_gc_jitter=False), counter=counter)
        original = inner.generate

        def tracking_generate(size: int) -> bytes:
            nonlocal active, overlap
            with guard:
                active += 1
                overlap = overlap or active > 1
            try:
                return original(size)
            finally:
                with guard:
                    active -= 1

        inner.generate = tracking_generate  # type: ignore[method-assign]
        mixed = MixedEntropySource([inner], HashMixer())

        threads = [
            threading.Thread(target=lambda: [mixed.generate(32) for _ in range(50)])
            for _ in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert overlap is False
        assert counter.value == 4 * 50 * 4

    def test_close_closes_children(self) -> None:
        a = _PatternSource(0x01, Strength.LOW)
        b = _PatternSource(0x02, Strength.LOW)
        MixedEntropySource([a, b], HashMixer()).close()
        assert a.closed and b.closed

    def test_health_check(self) -> None:
        mixed = MixedEntropySource([_PatternSource(0x01, Strength.LOW)], HashMixer())
        health = mixed.health_check()
        assert health["mixer"] == "hash"
        assert health["strength"] == "low"
        assert [s["source"] for s in health["sources"]] == ["p01"]
