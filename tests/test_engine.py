"""Tests for the conversion engine."""

from unittest.mock import patch

import pytest

from wiextract.errors import ResultSealedError
from wiextract.models import Attachment, Row
from wiextract.pipeline.engine import NOT_FOUND_MESSAGE, convert_attachment, convert_document


def _without_ids(result):
    data = result.model_dump()
    for item in data["work_instructions"]["instructions"]:
        item.pop("id")
    return data


class TestConvertDocument:
    """Tests for single-document conversion."""

    def test_grouped_items_and_score(self, make_document, sample_rows):
        """Heading and list rows become grouped items with a score."""
        result = convert_document(make_document(sample_rows))

        assert [(i.group_name, i.text) for i in result.instructions] == [
            ("Section A", "Step 1"),
            ("Section A", "Step 2"),
        ]
        assert result.conversion_score == 50
        assert result.rule_violations == ()
        assert not result.aborted
        assert result.work_instructions.source_filename == "sample.docx"

    def test_no_instruction_table(self, make_document):
        """No marked table gives a single NotFound warning."""
        result = convert_document(make_document([("Safety", False), ("Wear gloves", True)]))

        assert len(result.rule_violations) == 1
        violation = result.rule_violations[0]
        assert violation.rule == "NotFound"
        assert violation.message == NOT_FOUND_MESSAGE
        assert NOT_FOUND_MESSAGE == "No working instructions found in a table in the file"
        assert not violation.is_critical
        assert not result.aborted
        assert result.instructions == ()
        assert result.conversion_score == 0

    def test_document_without_tables(self, make_document):
        """A document without tables is NotFound, not an error."""
        result = convert_document(make_document())

        assert [v.rule for v in result.rule_violations] == ["NotFound"]

    def test_empty_row_counts_toward_score(self, make_document):
        """Skipped empty rows still count in the score denominator."""
        result = convert_document(
            make_document([("Work Instruction", False), ("", False), ("Step 1", True)])
        )

        assert [i.text for i in result.instructions] == ["Step 1"]
        assert result.conversion_score == 33

    def test_items_from_all_tables_in_one_aggregate(self, make_document):
        """Items of every classified table share one aggregate."""
        document = make_document(
            [("Work Instruction", False), ("Section A", False), ("Step 1", True)],
            [("Tools", False), ("Spanner", True)],
            [("Work Instruction", False), ("Step 2", True), ("Section B", False), ("Step 3", True)],
        )

        result = convert_document(document)

        assert [(i.group_name, i.text) for i in result.instructions] == [
            ("Section A", "Step 1"),
            ("Section A", "Step 2"),
            ("Section B", "Step 3"),
        ]
        assert result.conversion_score == 33

    def test_malformed_row_aborts(self, make_document, sample_rows):
        """A row without cells aborts with RunTimeError."""
        document = make_document(sample_rows)
        table = document.tables[0].model_copy(
            update={"rows": document.tables[0].rows + [Row(cells=[])]}
        )
        document = document.model_copy(update={"tables": [table]})

        result = convert_document(document)

        assert len(result.rule_violations) == 1
        assert result.rule_violations[0].rule == "RunTimeError"
        assert result.rule_violations[0].is_critical
        assert result.aborted
        assert result.instructions == ()
        assert result.conversion_score == 0

    @patch("wiextract.pipeline.engine.extract_tables")
    def test_unexpected_error_is_recorded(self, mock_extract, make_document, sample_rows):
        """Unexpected exceptions become one critical violation."""
        mock_extract.side_effect = RuntimeError("paragraph unreadable")

        result = convert_document(make_document(sample_rows))

        assert [(v.rule, v.message, v.is_critical) for v in result.rule_violations] == [
            ("RunTimeError", "paragraph unreadable", True)
        ]
        assert result.aborted

    @patch("wiextract.pipeline.engine.score_document")
    def test_partial_items_discarded_on_failure(self, mock_score, make_document, sample_rows):
        """A failure after extraction leaves no items behind."""
        mock_score.side_effect = ZeroDivisionError("division by zero")

        result = convert_document(make_document(sample_rows))

        assert result.aborted
        assert result.instructions == ()

    def test_result_is_sealed(self, make_document, sample_rows):
        """Returned results reject further violations."""
        result = convert_document(make_document(sample_rows))

        with pytest.raises(ResultSealedError):
            result.add_violation("NotFound", False, "late")

    def test_repeat_runs_match_except_ids(self, make_document, sample_rows):
        """Two runs over one document differ only in item ids."""
        document = make_document(sample_rows, [("Work Instruction", False), ("Step 3", True)])

        first = convert_document(document)
        second = convert_document(document)

        assert _without_ids(first) == _without_ids(second)
        assert first.instructions[0].id != second.instructions[0].id

    def test_filename_override(self, make_document, sample_rows):
        """An explicit filename replaces the document's own."""
        result = convert_document(make_document(sample_rows), filename="other.docx")

        assert result.filename == "other.docx"
        assert result.work_instructions.source_filename == "other.docx"


class TestConvertAttachment:
    """Tests for conversion straight from file bytes."""

    def test_docx_attachment(self, tmp_path, write_docx, sample_rows):
        """A real .docx converts end to end."""
        path = write_docx(tmp_path / "pump.docx", sample_rows)

        result = convert_attachment(Attachment.from_path(path))

        assert result.filename == "pump.docx"
        assert [i.text for i in result.instructions] == ["Step 1", "Step 2"]
        assert result.conversion_score == 50

    def test_legacy_doc_aborts(self):
        """A legacy .doc file aborts instead of raising."""
        attachment = Attachment(file_name="old.doc", file_bytes=b"\xd0\xcf\x11\xe0legacy")

        result = convert_attachment(attachment)

        assert result.aborted
        assert len(result.rule_violations) == 1
        assert result.rule_violations[0].rule == "RunTimeError"
        assert ".doc" in result.rule_violations[0].message
