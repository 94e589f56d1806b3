"""SVG page export: PDF/PNG conversion via cairosvg and PDF merging via pypdf."""

import pathlib
import shutil
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from .utils.file_ops import ensure_export_dir

PathLike = Union[str, pathlib.Path]


@dataclass
class ExportResult:
    """Result of an export step."""

    ok: bool
    reason: Optional[str] = None
    outputs: List[pathlib.Path] = field(default_factory=list)


def svg_to_pdf(svg: str, out_path: PathLike) -> ExportResult:
    """Convert an SVG document string to a single-page PDF."""
    try:
        import cairosvg
    except (ImportError, OSError) as e:
        # OSError: cairosvg installed but the cairo library is missing
        return ExportResult(ok=False, reason=f"cairosvg unavailable: {e}")

    out = pathlib.Path(out_path)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        cairosvg.svg2pdf(bytestring=svg.encode('utf-8'), write_to=str(out))
    except Exception as e:
        return ExportResult(ok=False, reason=f"SVG to PDF failed: {e}")
    return ExportResult(ok=True, outputs=[out])


def svg_to_png(svg: str, out_path: PathLike) -> ExportResult:
    """Rasterize an SVG document string to PNG (used for page previews)."""
    try:
        import cairosvg
    except (ImportError, OSError) as e:
        return ExportResult(ok=False, reason=f"cairosvg unavailable: {e}")

    out = pathlib.Path(out_path)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        cairosvg.svg2png(bytestring=svg.encode('utf-8'), write_to=str(out))
    except Exception as e:
        return ExportResult(ok=False, reason=f"SVG to PNG failed: {e}")
    return ExportResult(ok=True, outputs=[out])


def merge_pdfs(pdf_paths: Sequence[PathLike], out_path: PathLike) -> ExportResult:
    """Concatenate PDFs page by page into ``out_path``."""
    if not pdf_paths:
        return ExportResult(ok=False, reason="No PDF files provided for merging")

    out = pathlib.Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    # If only one PDF, just copy it to output
    if len(pdf_paths) == 1:
        try:
            shutil.copyfile(pdf_paths[0], out)
        except OSError as e:
            return ExportResult(ok=False, reason=f"Failed to copy PDF: {e}")
        return ExportResult(ok=True, outputs=[out])

    from pypdf import PdfReader, PdfWriter
    from pypdf.errors import PyPdfError

    writer = PdfWriter()
    for pdf_path in pdf_paths:
        try:
            reader = PdfReader(str(pdf_path))
        except (OSError, PyPdfError) as e:
            return ExportResult(ok=False, reason=f"Failed to load PDF {pdf_path}: {e}")
        for page in reader.pages:
            writer.add_page(page)

    try:
        with open(out, 'wb') as f:
            writer.write(f)
    except OSError as e:
        return ExportResult(ok=False, reason=f"Failed to save merged PDF: {e}")
    return ExportResult(ok=True, outputs=[out])


def write_svg_pages(pages: Sequence[str], export_dir: PathLike, stem: str = 'flashcards') -> List[pathlib.Path]:
    """Write one ``{stem}{n}.svg`` per page and return the paths."""
    out_dir = ensure_export_dir(export_dir)
    paths = []
    for idx, svg in enumerate(pages):
        path = out_dir / f"{stem}{idx}.svg"
        path.write_text(svg, encoding='utf-8')
        paths.append(path)
    return paths


def write_png_previews(pages: Sequence[str], export_dir: PathLike, stem: str = 'flashcards') -> ExportResult:
    out_dir = ensure_export_dir(export_dir)
    outputs = []
    for idx, svg in enumerate(pages):
        res = svg_to_png(svg, out_dir / f"{stem}{idx}.png")
        if not res.ok:
            return ExportResult(ok=False, reason=res.reason, outputs=outputs)
        outputs.extend(res.outputs)
    return ExportResult(ok=True, outputs=outputs)


def export_pdf(
    pages: Sequence[str], pdf_path: PathLike, work_dir: PathLike, clean: bool = True
) -> ExportResult:
    """Convert every SVG page to PDF in ``work_dir`` and merge them into ``pdf_path``.

    clean: remove the per-page PDFs after a successful merge.
    """
    out_dir = ensure_export_dir(work_dir)
    page_pdfs: List[pathlib.Path] = []
    for idx, svg in enumerate(pages):
        res = svg_to_pdf(svg, out_dir / f"flashcards{idx}.pdf")
        if not res.ok:
            return res
        page_pdfs.extend(res.outputs)

    merged = merge_pdfs(page_pdfs, pdf_path)
    if merged.ok and clean:
        out = pathlib.Path(pdf_path).resolve()
        for p in page_pdfs:
            if p.resolve() != out:
                try:
                    p.unlink()
                except OSError:
                    pass
    return merged
