# app/services/parsers/common_structs.py

from dataclasses import dataclass
from datetime import date as date_obj, datetime
from typing import Optional, Union

from app.services.utils.errors import ValidationError

# Значение фильтра "все ученики" / "все тренеры"
ALL_SENTINEL = '_all'


@dataclass(frozen=True)
class Student:
    """Ученик из списка students.csv."""
    id: str
    name: str
    class_name: str
    email: str

    @property
    def select_value(self) -> str:
        return self.name or f"student_{self.id}"

    @property
    def label(self) -> str:
        return f"{self.name} - {self.class_name}"


@dataclass(frozen=True)
class Teacher:
    """Тренер из списка teachers.csv. Ставка хранится строкой, как в файле."""
    id: str
    name: str
    hourly_rate: str

    @property
    def select_value(self) -> str:
        return self.name or f"teacher_{self.id}"

    @property
    def label(self) -> str:
        return f"{self.name} - {self.hourly_rate}元/小時"


@dataclass(frozen=True)
class LessonRecord:
    """
    Одна запись о занятии. После создания не меняется:
    редактирование - это удаление и новое добавление.
    """
    id: str
    student_name: str
    teacher_name: str
    hours: int
    minutes: int
    date: date_obj

    @property
    def date_iso(self) -> str:
        return self.date.strftime('%Y-%m-%d')

    @property
    def duration_display(self) -> str:
        return f"{self.hours}小時{self.minutes}分鐘"


def _normalize_choice(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value or value == ALL_SENTINEL:
        return None
    return value


def as_day(value: Union[date_obj, datetime, None]) -> Optional[date_obj]:
    """Отбрасывает время суток: сравнение дат идет с точностью до дня."""
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class FilterCriteria:
    """
    Три независимых условия фильтра. None (или '_all') означает "подходит всё".
    """
    student: Optional[str] = None
    teacher: Optional[str] = None
    date: Optional[date_obj] = None

    def __post_init__(self):
        object.__setattr__(self, 'student', _normalize_choice(self.student))
        object.__setattr__(self, 'teacher', _normalize_choice(self.teacher))
        object.__setattr__(self, 'date', as_day(self.date))

    @classmethod
    def from_args(cls, args) -> 'FilterCriteria':
        """Собирает фильтр из query-параметров (student, teacher, date=yyyy-MM-dd)."""
        raw_date = (args.get('date') or '').strip()
        filter_date = None
        if raw_date:
            try:
                filter_date = datetime.strptime(raw_date, '%Y-%m-%d').date()
            except ValueError:
                raise ValidationError(f"Некорректная дата фильтра: '{raw_date}'")
        return cls(student=args.get('student'), teacher=args.get('teacher'), date=filter_date)

    def matches(self, record: LessonRecord) -> bool:
        student_match = self.student is None or record.student_name == self.student
        teacher_match = self.teacher is None or record.teacher_name == self.teacher
        date_match = self.date is None or as_day(record.date) == self.date
        return student_match and teacher_match and date_match
