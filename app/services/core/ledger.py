# app/services/core/ledger.py

import logging
import uuid
from datetime import date
from threading import Lock
from typing import List, Optional, Tuple

from app.services.clients.roster_client import Rosters
from app.services.core.view_filter import filter_records
from app.services.parsers.common_structs import FilterCriteria, LessonRecord, as_day
from app.services.utils.errors import ValidationError

log = logging.getLogger(__name__)


class LessonLedger:
    """
    Журнал занятий текущей сессии: упорядоченный список записей,
    добавление, удаление по id и фильтрация.
    """

    def __init__(self, rosters: Rosters):
        # Списки общие с сессией: после загрузки ростеров журнал видит их сразу
        self.rosters = rosters
        self._records: List[LessonRecord] = []
        self._lock = Lock()

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> Tuple[LessonRecord, ...]:
        return tuple(self._records)

    def get(self, record_id: str) -> Optional[LessonRecord]:
        return next((record for record in self._records if record.id == record_id), None)

    def _validate(self, student_name: str, teacher_name: str, hours: int, minutes: int):
        if not student_name or not teacher_name:
            raise ValidationError("Не выбран ученик или тренер")
        if hours < 0 or not 0 <= minutes <= 59:
            raise ValidationError(f"Некорректная длительность: {hours}ч {minutes}мин")
        if hours == 0 and minutes == 0:
            raise ValidationError("Длительность занятия должна быть больше нуля")
        if not any(s.select_value == student_name for s in self.rosters.students):
            raise ValidationError(f"Ученик '{student_name}' не найден в списке")
        if not any(t.select_value == teacher_name for t in self.rosters.teachers):
            raise ValidationError(f"Тренер '{teacher_name}' не найден в списке")

    def add(self, student_name: str, teacher_name: str, hours: int, minutes: int, lesson_date: date) -> str:
        """
        Добавляет запись в конец журнала и возвращает ее id.
        При ошибке валидации журнал не меняется.
        """
        self._validate(student_name, teacher_name, hours, minutes)
        record = LessonRecord(
            id=uuid.uuid4().hex,
            student_name=student_name,
            teacher_name=teacher_name,
            hours=hours,
            minutes=minutes,
            date=as_day(lesson_date),
        )
        with self._lock:
            self._records.append(record)
        log.info(f"Добавлена запись {record.id}: {student_name} / {teacher_name}, "
                 f"{record.duration_display}, {record.date_iso}")
        return record.id

    def remove(self, record_id: str) -> Optional[LessonRecord]:
        """Удаляет запись по id. Отсутствующий id - не ошибка, возвращается None."""
        with self._lock:
            record = self.get(record_id)
            if record is None:
                log.info(f"Запись {record_id} не найдена. Удаление пропущено.")
                return None
            self._records = [r for r in self._records if r.id != record_id]
        log.info(f"Удалена запись {record_id} ({record.student_name})")
        return record

    def filter(self, criteria: FilterCriteria) -> List[LessonRecord]:
        return filter_records(self.records, criteria)
