"""
Tests for the export pipeline controller.
"""

import json

import pytest

from worksheet_toolkit.builder.config import FormatOptions
from worksheet_toolkit.builder.controller import (
    METADATA_FILE,
    ExportError,
    compute_layout,
    export_material,
    render_to_html_slides,
    render_to_plain_text,
    render_to_word_document,
)
from worksheet_toolkit.builder.output.surface import PillowSurface
from worksheet_toolkit.builder.output.word import Unavailable


@pytest.fixture
def small_surface():
    return PillowSurface(scale=0.25)


class TestComputeLayout:
    """Tests for compute_layout()."""

    def test_compute_layout_when_mixed_blocks_then_questions_numbered(self, mixed_blocks):
        document = compute_layout(mixed_blocks, FormatOptions())

        assert [b.display_number for b in document.blocks] == [1, 2, None, None, 3]
        assert [n.block_id for n in document.nodes] == ["q1", "q2", "p1", "c1", "q3"]

    def test_compute_layout_when_many_blocks_then_page_index_monotonic(self, mixed_blocks):
        document = compute_layout(mixed_blocks * 10, FormatOptions(columns=2))

        keys = [(n.page_index, n.column_index) for n in document.nodes]
        assert keys == sorted(keys)
        assert document.page_count == len(document.pages) > 1

    def test_compute_layout_when_repeated_then_identical(self, mixed_blocks, exam_info):
        options = FormatOptions(columns=2, show_difficulty="stars", show_sources=True)

        first = compute_layout(mixed_blocks, options, exam_info=exam_info, include_answer_key=True)
        second = compute_layout(mixed_blocks, options, exam_info=exam_info, include_answer_key=True)

        assert first == second

    def test_compute_layout_when_no_options_then_defaults(self, mixed_blocks):
        document = compute_layout(mixed_blocks)

        assert document.options == FormatOptions()
        assert (document.page_width, document.page_height) == (595, 842)

    def test_compute_layout_when_no_exam_info_then_no_header(self, mixed_blocks):
        document = compute_layout(mixed_blocks)

        assert document.header is None
        assert document.answer_key is None

    def test_compute_layout_when_empty_then_no_pages(self):
        document = compute_layout([])

        assert document.pages == ()
        assert document.page_count == 0


class TestRenderHelpers:
    def test_render_to_word_document_when_available_then_docx(self, mixed_blocks):
        assert render_to_word_document(mixed_blocks).extension == ".docx"

    def test_render_to_word_document_when_unavailable_then_txt(self, mixed_blocks):
        artifact = render_to_word_document(mixed_blocks, capability=Unavailable("missing"))

        assert artifact.extension == ".txt"

    def test_render_to_plain_text_when_called_then_text(self, mixed_blocks, exam_info):
        artifact = render_to_plain_text(mixed_blocks, exam_info=exam_info)

        assert artifact.data.decode("utf-8").startswith("Unit Test")

    def test_render_to_html_slides_when_called_then_html(self, mixed_blocks):
        assert render_to_html_slides(mixed_blocks).extension == ".html"


class TestExportMaterial:
    """Tests for export_material()."""

    def test_export_material_when_all_formats_then_files_and_metadata(
        self, mixed_blocks, exam_info, tmp_path, small_surface
    ):
        # Act
        result = export_material(
            mixed_blocks,
            FormatOptions(columns=2),
            exam_info,
            formats=["pdf", "docx", "txt", "html"],
            output_dir=tmp_path / "out",
            include_answer_key=True,
            surface=small_surface,
        )

        # Assert
        assert sorted(p.name for p in result.files.values()) == [
            "worksheet.docx",
            "worksheet.html",
            "worksheet.pdf",
            "worksheet.txt",
        ]
        assert all(p.exists() for p in result.files.values())
        assert result.question_count == 3
        assert result.page_count == 1
        assert result.warnings == ()

        metadata = json.loads((tmp_path / "out" / METADATA_FILE).read_text(encoding="utf-8"))
        assert metadata["title"] == "Unit Test"
        assert metadata["options"]["columns"] == 2
        assert metadata["files"]["pdf"] == "worksheet.pdf"
        assert [m["number"] for m in metadata["manifest"]] == [1, 2, None, None, 3]
        assert metadata["manifest"][0]["page"] == 1

    def test_export_material_when_pdf_then_header_content_and_key_pages(
        self, mixed_blocks, exam_info, tmp_path, small_surface
    ):
        from pypdf import PdfReader

        result = export_material(
            mixed_blocks,
            exam_info=exam_info,
            output_dir=tmp_path,
            include_answer_key=True,
            surface=small_surface,
        )

        assert len(PdfReader(str(result.files["pdf"])).pages) == 3

    def test_export_material_when_docx_unavailable_then_warning_and_txt(self, mixed_blocks, tmp_path):
        result = export_material(
            mixed_blocks,
            formats=["docx"],
            output_dir=tmp_path,
            capability=Unavailable("missing"),
        )

        assert result.files["docx"].suffix == ".txt"
        assert result.warnings == ("Word export unavailable, wrote plain text instead",)

    def test_export_material_when_unknown_format_then_raises(self, mixed_blocks, tmp_path):
        with pytest.raises(ExportError, match="Unsupported formats"):
            export_material(mixed_blocks, formats=["pptx"], output_dir=tmp_path)

    def test_export_material_when_output_dir_is_file_then_raises(self, mixed_blocks, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        with pytest.raises(ExportError, match="Failed to write"):
            export_material(mixed_blocks, formats=["txt"], output_dir=blocker)

    def test_export_material_when_custom_stem_then_file_name(self, mixed_blocks, tmp_path):
        result = export_material(mixed_blocks, formats=["txt"], output_dir=tmp_path, stem="unit3")

        assert result.files["txt"].name == "unit3.txt"
