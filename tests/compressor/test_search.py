from __future__ import annotations

from pathlib import Path
from typing import Callable, List

import pytest

from batchpdf.exceptions import SerializationError
from batchpdf.tools.compressor.candidates import Candidate
from batchpdf.tools.compressor.exceptions import NoCandidateError
from batchpdf.tools.compressor.params import LOW_PRESET, CompressionParams, SearchBounds
from batchpdf.tools.compressor.search import (
    SearchState,
    TargetSizeSearch,
    fallback_threshold,
    tolerance,
)


class FakeProducer:
    """Writes a small file per call and reports a size computed from the params."""

    def __init__(self, directory: Path, size_of: Callable[[CompressionParams], int]) -> None:
        self.directory = directory
        self.size_of = size_of
        self.calls: List[CompressionParams] = []
        self.max_live = 0

    def live_files(self) -> List[Path]:
        return sorted(self.directory.glob("cand_*.pdf"))

    def __call__(self, params: CompressionParams) -> Candidate:
        self.calls.append(params)
        path = self.directory / f"cand_{len(self.calls)}.pdf"
        path.write_bytes(b"%PDF-fake")
        self.max_live = max(self.max_live, len(self.live_files()))
        return Candidate(path=path, size=self.size_of(params), params=params)


def linear_size(params: CompressionParams) -> int:
    return int(2_000_000 * params.quality * params.scale * params.scale)


def test_tolerance_and_fallback_threshold() -> None:
    assert tolerance(50_000) == 10_000
    assert tolerance(1_000_000) == 80_000
    assert fallback_threshold(50_000) == 10_000
    assert fallback_threshold(1_000_000) == 100_000


def test_search_rejects_non_positive_target(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        TargetSizeSearch(0, FakeProducer(tmp_path, linear_size))


def test_search_state_starts_from_low_preset_clamped() -> None:
    state = SearchState.start(SearchBounds())
    assert state.params == CompressionParams(0.35, 0.5)

    narrow = SearchState.start(SearchBounds(quality_min=0.5, quality_max=0.9, scale_min=0.6))
    assert narrow.params == CompressionParams(0.5, 0.6)


def test_search_state_lowers_quality_when_too_large() -> None:
    state = SearchState.start(SearchBounds())
    state.advance(size=900, target=500)
    assert state.quality_high == pytest.approx(0.35)
    assert state.quality == pytest.approx(0.30)
    assert state.scale == pytest.approx(0.5)


def test_search_state_raises_quality_when_too_small() -> None:
    state = SearchState.start(SearchBounds())
    state.advance(size=100, target=500)
    assert state.quality_low == pytest.approx(0.35)
    assert state.quality == pytest.approx(0.625)


def test_search_state_moves_scale_once_quality_converged() -> None:
    state = SearchState(
        quality_low=0.30, quality_high=0.34, scale_low=0.4, scale_high=1.0, quality=0.32, scale=0.5
    )
    state.advance(size=100, target=500)
    assert state.quality_converged
    assert state.scale_low == pytest.approx(0.5)
    assert state.scale == pytest.approx(0.75)

    state.advance(size=900, target=500)
    assert state.scale_high == pytest.approx(0.75)
    assert state.scale == pytest.approx(0.625)


def test_search_stops_early_within_tolerance(tmp_path: Path) -> None:
    producer = FakeProducer(tmp_path, lambda params: 180_000)
    best = TargetSizeSearch(175_000, producer).run()

    assert best is not None
    assert len(producer.calls) == 1
    assert best.params == LOW_PRESET
    assert producer.live_files() == [best.path]


def test_search_keeps_at_most_one_live_candidate(tmp_path: Path) -> None:
    producer = FakeProducer(tmp_path, linear_size)
    target = 400_000
    search = TargetSizeSearch(target, producer)
    best = search.run()

    assert best is not None
    assert producer.max_live <= 2
    assert producer.live_files() == [best.path]
    assert search.iterations <= SearchBounds().max_iterations
    deltas = [abs(linear_size(params) - target) for params in producer.calls]
    assert best.delta(target) == min(deltas)


def test_search_runs_all_iterations_when_target_unreachable(tmp_path: Path) -> None:
    producer = FakeProducer(tmp_path, lambda params: 5_000_000)
    best = TargetSizeSearch(100_000, producer, SearchBounds(max_iterations=4)).run()

    assert best is not None
    # four search passes plus the low preset comparison
    assert len(producer.calls) == 5
    assert producer.calls[-1] == LOW_PRESET
    assert producer.live_files() == [best.path]


def test_search_skips_preset_comparison_within_threshold(tmp_path: Path) -> None:
    sizes = iter([1_300_000, 1_090_000, 1_095_000])
    producer = FakeProducer(tmp_path, lambda params: next(sizes))
    best = TargetSizeSearch(1_000_000, producer, SearchBounds(max_iterations=3)).run()

    assert best is not None
    assert len(producer.calls) == 3
    assert best.size == 1_090_000


def test_preset_comparison_can_win(tmp_path: Path) -> None:
    def size_of(params: CompressionParams) -> int:
        return 100_000 if params == LOW_PRESET and len(producer.calls) > 2 else 900_000

    producer = FakeProducer(tmp_path, size_of)
    best = TargetSizeSearch(100_000, producer, SearchBounds(max_iterations=2)).run()

    assert best is not None
    assert best.params == LOW_PRESET
    assert best.size == 100_000
    assert producer.live_files() == [best.path]


def test_search_returns_none_without_candidates(tmp_path: Path) -> None:
    def produce(params: CompressionParams) -> Candidate:
        raise NoCandidateError("no images")

    search = TargetSizeSearch(100_000, produce)
    assert search.run() is None
    assert search.iterations == 1


def test_serialization_failure_keeps_best_so_far(tmp_path: Path) -> None:
    producer = FakeProducer(tmp_path, lambda params: 150_000)

    def produce(params: CompressionParams) -> Candidate:
        if producer.calls:
            raise SerializationError("disk full")
        return producer(params)

    best = TargetSizeSearch(100_000, produce).run()
    assert best is not None
    assert best.size == 150_000
    assert producer.live_files() == [best.path]


def test_failing_search_leaves_no_files(tmp_path: Path) -> None:
    producer = FakeProducer(tmp_path, lambda params: 900_000)

    def produce(params: CompressionParams) -> Candidate:
        if len(producer.calls) == 2:
            raise RuntimeError("boom")
        return producer(params)

    with pytest.raises(RuntimeError):
        TargetSizeSearch(100_000, produce).run()
    assert producer.live_files() == []
