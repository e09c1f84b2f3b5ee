from __future__ import annotations

import random
from pathlib import Path
from typing import Callable
import sys

import pytest
from PIL import Image
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def noise_image(width: int, height: int, *, seed: int = 7, mode: str = "RGB") -> Image.Image:
    """Return a deterministic noisy image; noise keeps JPEG sizes sensitive to quality."""

    channels = len(mode)
    data = random.Random(seed).randbytes(width * height * channels)
    return Image.frombytes(mode, (width, height), data)


def write_image_pdf(path: Path, images: list[Image.Image]) -> Path:
    first, *rest = images
    first.save(path, "PDF", save_all=True, append_images=rest, resolution=72.0, quality=95)
    return path


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(5):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Producer": "batchpdf-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def image_pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(
        filename: str = "images.pdf",
        *,
        pages: int = 2,
        size: tuple[int, int] = (240, 180),
        same_image: bool = False,
    ) -> Path:
        width, height = size
        if same_image:
            images = [noise_image(width, height)] * pages
        else:
            images = [noise_image(width, height, seed=index) for index in range(pages)]
        return write_image_pdf(tmp_path / filename, images)

    return _create


@pytest.fixture()
def image_pdf(image_pdf_factory: Callable[..., Path]) -> Path:
    return image_pdf_factory()


@pytest.fixture()
def encrypted_pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(
        filename: str = "locked.pdf",
        *,
        user_password: str = "secret",
        owner_password: str | None = None,
        pages: int = 3,
    ) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=200, height=200)
        writer.add_metadata({"/Title": "Locked"})
        writer.encrypt(user_password=user_password, owner_password=owner_password)
        with path.open("wb") as stream:
            writer.write(stream)
        return path

    return _create


@pytest.fixture()
def encrypted_pdf(encrypted_pdf_factory: Callable[..., Path]) -> Path:
    return encrypted_pdf_factory()
