from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from PIL import Image
import pytest

from imagify.document.provider import PdfDocument, PyMuPdfProvider
from imagify.errors import DocumentReadError, InputError, UnsupportedFormatError
from imagify.pipeline import ConversionConfig, run_conversion


PAGE_SIZE = (200, 300)


def _config(pdf_path: Path | None, **overrides: object) -> ConversionConfig:
    values: dict[str, object] = {"pdf_path": pdf_path, "show_progress": False, "workers": 4}
    values.update(overrides)
    return ConversionConfig(**values)  # type: ignore[arg-type]


def _names(directory: Path) -> list[str]:
    return sorted(p.name for p in directory.iterdir())


@pytest.mark.asyncio
async def test_all_pages_into_default_directory(
    make_pdf: Callable[..., Path], tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    pdf_path = make_pdf("report.pdf", page_count=3)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    outcome = await run_conversion(_config(pdf_path))

    assert outcome.is_success
    assert sorted(outcome.succeeded) == [1, 2, 3]
    assert _names(workdir / "report") == ["1.png", "2.png", "3.png"]
    with Image.open(workdir / "report" / "1.png") as image:
        assert image.size == PAGE_SIZE


@pytest.mark.asyncio
async def test_selected_pages_as_webp(make_pdf: Callable[..., Path], tmp_path: Path) -> None:
    pdf_path = make_pdf(page_count=3)
    out = tmp_path / "out"

    outcome = await run_conversion(
        _config(pdf_path, output_path=out, pages=(1, 3), file_type="webp")
    )

    assert outcome.requested == 2
    assert _names(out) == ["1.webp", "3.webp"]


@pytest.mark.asyncio
async def test_scale_takes_priority_over_dimensions(
    make_pdf: Callable[..., Path], tmp_path: Path
) -> None:
    pdf_path = make_pdf(page_count=1)
    out = tmp_path / "out"

    await run_conversion(_config(pdf_path, output_path=out, scale=50.0, width=100, height=100))

    with Image.open(out / "1.png") as image:
        assert image.size == (100, 150)


@pytest.mark.asyncio
async def test_width_only_keeps_aspect_ratio(make_pdf: Callable[..., Path], tmp_path: Path) -> None:
    pdf_path = make_pdf(page_count=1)
    out = tmp_path / "out"

    await run_conversion(_config(pdf_path, output_path=out, width=300))

    with Image.open(out / "1.png") as image:
        assert image.size == (300, 450)


@pytest.mark.asyncio
async def test_exact_dimensions_as_jpg(make_pdf: Callable[..., Path], tmp_path: Path) -> None:
    pdf_path = make_pdf(page_count=2)
    out = tmp_path / "out"

    await run_conversion(_config(pdf_path, output_path=out, width=64, height=48, file_type="JPG"))

    assert _names(out) == ["1.jpg", "2.jpg"]
    with Image.open(out / "2.jpg") as image:
        assert image.format == "JPEG"
        assert image.size == (64, 48)


@pytest.mark.asyncio
async def test_dpi_scales_rendering(make_pdf: Callable[..., Path], tmp_path: Path) -> None:
    pdf_path = make_pdf(page_count=1)
    out = tmp_path / "out"

    await run_conversion(_config(pdf_path, output_path=out, dpi=144))

    with Image.open(out / "1.png") as image:
        assert image.size == (400, 600)


@pytest.mark.asyncio
async def test_rerun_is_idempotent(make_pdf: Callable[..., Path], tmp_path: Path) -> None:
    pdf_path = make_pdf(page_count=2)
    out = tmp_path / "out"
    config = _config(pdf_path, output_path=out)

    await run_conversion(config)
    first = {name: (out / name).read_bytes() for name in _names(out)}
    await run_conversion(config)
    second = {name: (out / name).read_bytes() for name in _names(out)}

    assert first == second
    assert list(first) == ["1.png", "2.png"]


@pytest.mark.asyncio
async def test_duplicate_pages_produce_one_file(
    make_pdf: Callable[..., Path], tmp_path: Path
) -> None:
    pdf_path = make_pdf(page_count=3)
    out = tmp_path / "out"

    outcome = await run_conversion(_config(pdf_path, output_path=out, pages=(2, 2, 2)))

    assert outcome.requested == 3
    assert outcome.succeeded == [2, 2, 2]
    assert _names(out) == ["2.png"]


@pytest.mark.asyncio
async def test_corrupt_page_is_partial_success(
    make_pdf: Callable[..., Path], tmp_path: Path
) -> None:
    class _CorruptSecondPage(PyMuPdfProvider):
        def extract_page(self, handle: PdfDocument, page_number: int) -> bytes:
            if page_number == 2:
                return b"garbage"
            return super().extract_page(handle, page_number)

    pdf_path = make_pdf(page_count=3)
    out = tmp_path / "out"

    outcome = await run_conversion(
        _config(pdf_path, output_path=out), provider=_CorruptSecondPage()
    )

    assert sorted(outcome.succeeded) == [1, 3]
    assert [(f.page_number, f.kind) for f in outcome.failures] == [(2, "DecodeError")]
    assert _names(out) == ["1.png", "3.png"]


@pytest.mark.asyncio
async def test_out_of_range_page_fails_alone(
    make_pdf: Callable[..., Path], tmp_path: Path
) -> None:
    pdf_path = make_pdf(page_count=2)
    out = tmp_path / "out"

    outcome = await run_conversion(_config(pdf_path, output_path=out, pages=(1, 9)))

    assert outcome.succeeded == [1]
    assert [(f.page_number, f.kind) for f in outcome.failures] == [(9, "ExtractionError")]
    assert _names(out) == ["1.png"]


@pytest.mark.asyncio
async def test_missing_source_fails_before_directory_creation(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(InputError):
        await run_conversion(_config(tmp_path / "missing.pdf"))
    with pytest.raises(InputError):
        await run_conversion(_config(None))

    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_unsupported_format_fails_before_scheduling(
    make_pdf: Callable[..., Path], tmp_path: Path
) -> None:
    pdf_path = make_pdf(page_count=1)
    out = tmp_path / "out"

    with pytest.raises(UnsupportedFormatError):
        await run_conversion(_config(pdf_path, output_path=out, file_type="bmp"))

    assert not out.exists()


@pytest.mark.asyncio
async def test_unreadable_document_is_fatal(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.pdf"
    bogus.write_bytes(b"this is not a pdf")
    out = tmp_path / "out"

    with pytest.raises(DocumentReadError):
        await run_conversion(_config(bogus, output_path=out))

    assert not out.exists()
