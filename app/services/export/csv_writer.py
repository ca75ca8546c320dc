# app/services/export/csv_writer.py

import csv
import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

import pandas as pd

from config import Config
from app.services.parsers.common_structs import LessonRecord

log = logging.getLogger(__name__)

BOM = '\ufeff'
EXPORT_HEADERS = ['日期', '學生', '教練', '時數']


@dataclass(frozen=True)
class ExportFile:
    """Готовый к скачиванию CSV-файл."""
    filename: str
    content: bytes
    mimetype: str = 'text/csv; charset=utf-8'


def write_csv(rows: Sequence[Dict[str, str]], headers: List[str]) -> str:
    """
    Собирает CSV: строка заголовка, затем строки в исходном порядке.
    Кавычки ставятся только там, где нужно. В начало добавляется BOM,
    чтобы Excel правильно определил кодировку.
    """
    frame = pd.DataFrame(list(rows), columns=headers, dtype=str)
    body = frame.to_csv(index=False, lineterminator='\n', quoting=csv.QUOTE_MINIMAL)
    return BOM + body


def build_export_rows(records: Sequence[LessonRecord]) -> List[Dict[str, str]]:
    return [
        {
            '日期': record.date_iso,
            '學生': record.student_name,
            '教練': record.teacher_name,
            '時數': record.duration_display,
        }
        for record in records
    ]


def export_lessons(records: Sequence[LessonRecord], filename: str = None) -> ExportFile:
    """Выгружает переданные (уже отфильтрованные) записи в CSV."""
    if filename is None:
        filename = Config.EXPORT_FILE_NAME

    content = write_csv(build_export_rows(records), EXPORT_HEADERS)
    log.info(f"Экспорт '{filename}': {len(records)} записей")
    return ExportFile(filename=filename, content=content.encode('utf-8'))
