from __future__ import annotations

from pathlib import Path

import pytest
from pypdf import PdfReader

from batchpdf.core.codec import load_document
from batchpdf.core.estimator import DocumentSizeEstimator
from batchpdf.exceptions import SerializationError
from batchpdf.tools.splitter import (
    CustomRangeMode,
    EveryPageMode,
    PageChunk,
    SizeBasedMode,
    plan_chunks,
    split_handle,
)


def _page_counts(paths: list[Path]) -> list[int]:
    return [len(PdfReader(path).pages) for path in paths]


def test_split_every_page(sample_pdf: Path, tmp_path: Path) -> None:
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    with load_document(sample_pdf) as handle:
        outputs = split_handle(handle, out_dir, EveryPageMode())

    assert [path.name for path in outputs] == [f"sample-{index}.pdf" for index in range(1, 6)]
    assert _page_counts(outputs) == [1, 1, 1, 1, 1]
    assert PdfReader(outputs[0]).metadata.title == "Sample"


def test_split_custom_ranges(sample_pdf: Path, tmp_path: Path) -> None:
    with load_document(sample_pdf) as handle:
        outputs = split_handle(handle, tmp_path / "out", CustomRangeMode("4-5, 1-2, 2"))

    assert [path.name for path in outputs] == ["sample-1.pdf", "sample-2.pdf", "sample-3.pdf"]
    assert _page_counts(outputs) == [2, 2, 1]


def test_split_custom_ranges_without_valid_segments(sample_pdf: Path, tmp_path: Path) -> None:
    with load_document(sample_pdf) as handle:
        assert split_handle(handle, tmp_path, CustomRangeMode("9-12")) == []


def test_split_by_size_respects_budget(image_pdf_factory, tmp_path: Path) -> None:
    source = image_pdf_factory("scan.pdf", pages=5, same_image=True)
    estimator = DocumentSizeEstimator()
    with load_document(source) as handle:
        two_pages = estimator.measure(handle.slice(0, 1))
        budget = two_pages + 1_000
        outputs = split_handle(handle, tmp_path / "parts", SizeBasedMode(budget))

    assert _page_counts(outputs) == [2, 2, 1]
    assert [path.name for path in outputs] == ["scan-1.pdf", "scan-2.pdf", "scan-3.pdf"]
    assert all(path.stat().st_size <= budget for path in outputs)


def test_split_by_size_with_tiny_budget_gives_single_pages(image_pdf_factory, tmp_path: Path) -> None:
    source = image_pdf_factory("scan.pdf", pages=3)
    with load_document(source) as handle:
        outputs = split_handle(handle, tmp_path, SizeBasedMode(100))
    assert _page_counts(outputs) == [1, 1, 1]


def test_plan_chunks_size_mode_is_lazy(sample_pdf: Path) -> None:
    with load_document(sample_pdf) as handle:
        plan = plan_chunks(handle, SizeBasedMode(10**9))
        assert not isinstance(plan, list)
        assert list(plan) == [PageChunk(0, 4)]


def test_plan_chunks_rejects_unknown_mode(sample_pdf: Path) -> None:
    with load_document(sample_pdf) as handle:
        with pytest.raises(ValueError):
            plan_chunks(handle, "every")  # type: ignore[arg-type]


def test_failed_chunk_removes_partial_outputs(
    sample_pdf: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    estimator = DocumentSizeEstimator()
    original = estimator.materialize
    calls = {"count": 0}

    def failing(writer, path):
        calls["count"] += 1
        if calls["count"] == 3:
            raise SerializationError("disk full")
        return original(writer, path)

    monkeypatch.setattr(estimator, "materialize", failing)
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    with load_document(sample_pdf) as handle:
        with pytest.raises(SerializationError):
            split_handle(handle, out_dir, EveryPageMode(), estimator=estimator)

    assert list(out_dir.iterdir()) == []
