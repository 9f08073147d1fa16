"""Tests for reading job descriptions from text and PDF files."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from jobprep.documents import extract_text_from_pdf, read_job_description


class TestReadJobDescription:
    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Job description file not found"):
            read_job_description(tmp_path / "missing.txt")

    def test_text_file(self, tmp_path: Path) -> None:
        path = tmp_path / "posting.txt"
        path.write_text("Senior Python Engineer\n\nResponsibilities: ship things.", encoding="utf-8")
        assert read_job_description(path).startswith("Senior Python Engineer")

    def test_pdf_dispatch(self, tmp_path: Path) -> None:
        path = tmp_path / "posting.PDF"
        path.write_bytes(b"%PDF-1.4 fake")
        with patch("jobprep.documents.extract_text_from_pdf", return_value="from pdf") as mock_extract:
            assert read_job_description(path) == "from pdf"
        mock_extract.assert_called_once_with(path)


class TestExtractTextFromPdf:
    def test_missing_pymupdf_import(self, tmp_path: Path) -> None:
        pdf_path = tmp_path / "posting.pdf"
        pdf_path.write_bytes(b"%PDF-1.4 fake")

        with (
            patch.dict("sys.modules", {"pymupdf": None}),
            pytest.raises(ImportError, match="pymupdf is required"),
        ):
            extract_text_from_pdf(pdf_path)

    def test_successful_extraction(self, tmp_path: Path) -> None:
        pdf_path = tmp_path / "posting.pdf"
        pdf_path.write_bytes(b"%PDF-1.4 fake")

        page_one = MagicMock()
        page_one.get_text.return_value = "Backend Engineer"
        page_two = MagicMock()
        page_two.get_text.return_value = "Requirements: Go, Kubernetes"

        mock_doc = MagicMock()
        mock_doc.__iter__ = MagicMock(return_value=iter([page_one, page_two]))

        mock_pymupdf = MagicMock()
        mock_pymupdf.open.return_value = mock_doc

        with patch.dict("sys.modules", {"pymupdf": mock_pymupdf}):
            result = extract_text_from_pdf(pdf_path)

        assert result == "Backend Engineer\nRequirements: Go, Kubernetes"
        mock_doc.close.assert_called_once()
