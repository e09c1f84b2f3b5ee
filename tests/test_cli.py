from __future__ import annotations

from pathlib import Path

import pytest

from batchpdf.cli.commands import parse_password
from batchpdf.cli.main import main


def test_parse_password(tmp_path: Path) -> None:
    path, password = parse_password(f"{tmp_path / 'a.pdf'}=pa=ss")
    assert path == str((tmp_path / "a.pdf").resolve())
    assert password == "pa=ss"


def test_cli_split_every_page(sample_pdf: Path, tmp_path: Path, capsys) -> None:
    out_dir = tmp_path / "out"
    exit_code = main(["split", str(sample_pdf), "-o", str(out_dir)])

    assert exit_code == 0
    assert len(list(out_dir.glob("sample-*.pdf"))) == 5
    assert "split: 1 succeeded" in capsys.readouterr().out


def test_cli_split_size_mode(sample_pdf: Path, tmp_path: Path) -> None:
    exit_code = main(["split", str(sample_pdf), "-o", str(tmp_path), "--mode", "size", "--max-size", "10MB"])
    assert exit_code == 0
    assert (tmp_path / "sample-1.pdf").exists()


def test_cli_compress_with_level(image_pdf: Path, tmp_path: Path) -> None:
    exit_code = main(["compress", str(image_pdf), "-o", str(tmp_path / "out"), "--level", "low"])
    assert exit_code == 0
    assert (tmp_path / "out" / "images_compressed.pdf").exists()


def test_cli_compress_with_target_size(image_pdf: Path, tmp_path: Path) -> None:
    exit_code = main(["compress", str(image_pdf), "-o", str(tmp_path), "--target-size", "50KB"])
    assert exit_code == 0


def test_cli_reports_missing_password(encrypted_pdf: Path, tmp_path: Path, capsys) -> None:
    exit_code = main(["split", str(encrypted_pdf), "-o", str(tmp_path / "out")])
    assert exit_code == 1
    assert "1 skipped for missing password" in capsys.readouterr().out


def test_cli_accepts_password(encrypted_pdf: Path, tmp_path: Path) -> None:
    exit_code = main(
        ["split", str(encrypted_pdf), "-o", str(tmp_path / "out"), "--password", f"{encrypted_pdf}=secret"]
    )
    assert exit_code == 0


def test_cli_rejects_bad_target_size(image_pdf: Path, tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["compress", str(image_pdf), "-o", str(tmp_path), "--target-size", "huge"])
    assert excinfo.value.code == 2


def test_cli_rejects_level_with_target(image_pdf: Path, tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(["compress", str(image_pdf), "-o", str(tmp_path), "--level", "low", "--target-size", "1MB"])
