# app/services/parsers/roster_parser.py

import logging
from typing import Dict, List, Optional

from .common_structs import Student, Teacher

log = logging.getLogger(__name__)

# Названия колонок в исходных CSV-файлах
COL_ID = '序號'
COL_NAME = '姓名'
COL_CLASS = '班級'
COL_EMAIL = 'email'
COL_RATE = '時薪'


def _field(row: Dict[str, Optional[str]], column: str) -> str:
    return row.get(column) or ''


def parse_students(rows: List[Dict[str, Optional[str]]]) -> List[Student]:
    """Превращает строки students.csv в список учеников (порядок сохраняется)."""
    students = [
        Student(
            id=_field(row, COL_ID),
            name=_field(row, COL_NAME),
            class_name=_field(row, COL_CLASS),
            email=_field(row, COL_EMAIL),
        )
        for row in rows
    ]
    log.info(f"Загружено учеников: {len(students)}")
    return students


def parse_teachers(rows: List[Dict[str, Optional[str]]]) -> List[Teacher]:
    """Превращает строки teachers.csv в список тренеров."""
    teachers = [
        Teacher(
            id=_field(row, COL_ID),
            name=_field(row, COL_NAME),
            hourly_rate=_field(row, COL_RATE),
        )
        for row in rows
    ]
    log.info(f"Загружено тренеров: {len(teachers)}")
    return teachers
