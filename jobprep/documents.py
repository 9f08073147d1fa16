"""Read job description text from plain-text or PDF files."""

from pathlib import Path


def read_job_description(path: str | Path) -> str:
    """Return the text of a job description file.

    ``.pdf`` files go through pymupdf; anything else is read as UTF-8 text.

    Raises:
        FileNotFoundError: If the file does not exist.
        ImportError: If a PDF is given and pymupdf is not installed.
    """
    path = Path(path)
    if not path.exists():
        msg = f"Job description file not found: {path}"
        raise FileNotFoundError(msg)
    if path.suffix.lower() == ".pdf":
        return extract_text_from_pdf(path)
    return path.read_text(encoding="utf-8")


def extract_text_from_pdf(path: str | Path) -> str:
    """Concatenated text of all pages, one page per block."""
    try:
        import pymupdf
    except ImportError:
        msg = (
            "pymupdf is required for PDF job descriptions. "
            "Install with: pip install 'job-interview-prep[pdf]'"
        )
        raise ImportError(msg) from None

    doc = pymupdf.open(str(path))
    text_parts: list[str] = []
    for page in doc:
        text_parts.append(page.get_text())
    doc.close()

    return "\n".join(text_parts)
