import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from career_insights.schemas.resume_checker import ResumeDocument  # noqa: E402
from career_insights.services.ats_intake import (  # noqa: E402
    IntakeValidationError,
    check_document_type,
    validate_intake,
)

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\n%%EOF"


def _pdf(content_type: str = "application/pdf") -> ResumeDocument:
    return ResumeDocument(filename="jane-doe.pdf", content_type=content_type, content=PDF_BYTES)


class IntakeValidatorTests(unittest.TestCase):
    def test_accepts_pdf_with_description(self):
        request = validate_intake(_pdf(), "  Senior Python engineer with FastAPI  ")
        self.assertEqual(request.document_format, "PDF")
        self.assertEqual(request.document.filename, "jane-doe.pdf")
        self.assertEqual(request.job_description, "  Senior Python engineer with FastAPI  ")

    def test_media_type_parameters_and_case_are_ignored(self):
        request = validate_intake(_pdf("Application/PDF; charset=binary"), "Data engineer")
        self.assertEqual(request.document_format, "PDF")

    def test_missing_file_is_rejected_first(self):
        with self.assertRaises(IntakeValidationError) as ctx:
            validate_intake(None, "")
        self.assertEqual(ctx.exception.code, "NoFileSelected")
        self.assertEqual(str(ctx.exception), "Please select a PDF resume to upload")

    def test_non_pdf_is_rejected_even_with_description(self):
        for content_type in ("text/plain", "application/msword", "image/png", ""):
            document = ResumeDocument(filename="resume.pdf", content_type=content_type, content=PDF_BYTES)
            with self.subTest(content_type=content_type):
                with self.assertRaises(IntakeValidationError) as ctx:
                    validate_intake(document, "Backend engineer")
                self.assertEqual(ctx.exception.code, "InvalidFileType")
                self.assertEqual(str(ctx.exception), "Please upload a PDF file")

    def test_blank_description_is_rejected(self):
        for description in ("", "   ", "\n\t ", None):
            with self.subTest(description=description):
                with self.assertRaises(IntakeValidationError) as ctx:
                    validate_intake(_pdf(), description)
                self.assertEqual(ctx.exception.code, "EmptyJobDescription")

    def test_check_document_type_returns_document(self):
        document = _pdf()
        self.assertIs(check_document_type(document), document)
        with self.assertRaises(IntakeValidationError):
            check_document_type(_pdf("text/plain"))

    def test_document_size_label(self):
        document = ResumeDocument(filename="big.pdf", content_type="application/pdf", content=b"x" * (1024 * 1024))
        self.assertEqual(document.size_label, "1.00 MB")


if __name__ == "__main__":
    unittest.main()
