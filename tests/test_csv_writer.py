"""Тесты экспорта в CSV."""

from datetime import date

from app.services.export.csv_writer import BOM, EXPORT_HEADERS, export_lessons, write_csv
from app.services.parsers.common_structs import FilterCriteria


class TestWriteCsv:

    def test_header_rows_and_bom(self):
        text = write_csv([{"a": "1", "b": "x"}, {"a": "2", "b": "y"}], ["a", "b"])
        assert text == BOM + "a,b\n1,x\n2,y\n"

    def test_quotes_only_when_needed(self):
        text = write_csv([{"a": "x,y", "b": 'say "hi"'}], ["a", "b"])
        assert text == BOM + 'a,b\n"x,y","say ""hi"""\n'

    def test_column_order_follows_headers(self):
        text = write_csv([{"b": "2", "a": "1"}], ["a", "b"])
        assert text == BOM + "a,b\n1,2\n"

    def test_no_rows(self):
        assert write_csv([], ["a", "b"]) == BOM + "a,b\n"


class TestExportLessons:

    def test_filtered_export(self, sample_ledger):
        records = sample_ledger.filter(FilterCriteria(student="Alice"))
        export = export_lessons(records)

        assert export.filename == "桌球課程記錄.csv"
        assert export.mimetype.startswith("text/csv")
        text = export.content.decode("utf-8")
        assert text.startswith(BOM)

        lines = text[len(BOM):].splitlines()
        assert len(lines) == len(records) + 1
        assert lines[0] == ",".join(EXPORT_HEADERS)
        assert lines[1] == "2024-01-01,Alice,Bob,1小時0分鐘"
        assert lines[2] == "2024-01-03,Alice,Dan,2小時0分鐘"

    def test_custom_filename(self, ledger):
        ledger.add("Carol", "Dan", 0, 30, date(2024, 5, 1))
        export = export_lessons(ledger.records, filename="lessons.csv")
        assert export.filename == "lessons.csv"
        assert "0小時30分鐘" in export.content.decode("utf-8")
