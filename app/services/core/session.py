# app/services/core/session.py

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from datetime import date as date_obj
from typing import List, Optional

from config import Config
from app.services.clients import roster_client
from app.services.clients.roster_client import Rosters
from app.services.core import notices
from app.services.core.ledger import LessonLedger
from app.services.core.notices import Notice
from app.services.core.notifier import Notifier
from app.services.export.csv_writer import ExportFile, export_lessons
from app.services.parsers.common_structs import FilterCriteria, LessonRecord
from app.services.utils.enums import LessonAction
from app.services.utils.errors import RosterLoadError, ValidationError

log = logging.getLogger(__name__)


def _to_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass
class LessonForm:
    """Состояние формы добавления занятия."""
    student: str = ''
    teacher: str = ''
    hours: int = 0
    minutes: int = 0
    date: date_obj = field(default_factory=date_obj.today)

    def set_hours(self, value):
        self.hours = max(0, _to_int(value))

    def set_minutes(self, value):
        self.minutes = min(59, max(0, _to_int(value)))

    def reset(self):
        self.student = ''
        self.teacher = ''
        self.hours = 0
        self.minutes = 0
        self.date = date_obj.today()


class SessionState:
    """
    Все состояние одной сессии: списки, журнал, форма, фильтр,
    флаг загрузки и очередь уведомлений для интерфейса.
    """

    def __init__(self, students_url: str = None, teachers_url: str = None,
                 fetch_timeout: Optional[float] = None, notifier_workers: int = 1):
        self.students_url = students_url or Config.STUDENTS_CSV_URL
        self.teachers_url = teachers_url or Config.TEACHERS_CSV_URL
        self.fetch_timeout = fetch_timeout

        self.rosters = Rosters()
        self.ledger = LessonLedger(self.rosters)
        self.notifier = Notifier(self.rosters, max_workers=notifier_workers)
        self.form = LessonForm()
        self.criteria = FilterCriteria()
        # Флаг поднимает только запущенная загрузка списков
        self.is_loading = False
        self._notices: List[Notice] = []
        self._notices_lock = threading.Lock()

    # --- Уведомления для интерфейса ---

    def push_notice(self, notice: Notice):
        with self._notices_lock:
            self._notices.append(notice)

    def drain_notices(self) -> List[Notice]:
        with self._notices_lock:
            drained, self._notices = self._notices, []
        return drained

    # --- Загрузка списков ---

    async def load_rosters(self):
        """
        Однократная загрузка списков. Никогда не бросает исключение:
        при ошибке списки остаются пустыми и добавляется одно уведомление.
        """
        self.is_loading = True
        try:
            loaded = await roster_client.load_rosters(self.students_url, self.teachers_url, self.fetch_timeout)
            # Меняем содержимое, а не объекты: журнал и уведомления держат ссылку на self.rosters
            self.rosters.students[:] = loaded.students
            self.rosters.teachers[:] = loaded.teachers
            log.info(f"Списки загружены: учеников {len(loaded.students)}, тренеров {len(loaded.teachers)}")
        except RosterLoadError as e:
            log.error(f"Error fetching data: {e}")
            self.rosters.students.clear()
            self.rosters.teachers.clear()
            self.push_notice(notices.ROSTER_LOAD_FAILED)
        finally:
            self.is_loading = False

    # --- Журнал ---

    def submit_form(self, form: Optional[LessonForm] = None) -> Optional[str]:
        """
        Добавляет занятие из формы. Возвращает id записи или None при ошибке валидации.
        HTTP-запросы передают свою форму: общая self.form между потоками не делится.
        """
        if form is None:
            form = self.form
        try:
            record_id = self.ledger.add(form.student, form.teacher, form.hours, form.minutes, form.date)
        except ValidationError as e:
            log.warning(f"Запись не добавлена: {e}")
            self.push_notice(notices.VALIDATION_FAILED)
            return None

        self.notifier.notify(form.student, LessonAction.ADD)
        form.reset()
        self.push_notice(notices.RECORD_ADDED)
        return record_id

    def delete_record(self, record_id: str) -> Optional[LessonRecord]:
        removed = self.ledger.remove(record_id)
        if removed is not None:
            self.notifier.notify(removed.student_name, LessonAction.DELETE)
            self.push_notice(notices.RECORD_DELETED)
        return removed

    # --- Фильтр и экспорт ---

    def set_filter(self, criteria: FilterCriteria):
        self.criteria = criteria

    def reset_filter(self):
        self.criteria = FilterCriteria()

    def filtered_records(self) -> List[LessonRecord]:
        # Пересчитывается при каждом вызове, отдельный отфильтрованный список не хранится
        return self.ledger.filter(self.criteria)

    def export(self) -> Optional[ExportFile]:
        records = self.filtered_records()
        if not records:
            log.info("Нет записей для экспорта.")
            self.push_notice(notices.NOTHING_TO_EXPORT)
            return None
        return export_lessons(records)


def start_background_load(session: SessionState) -> threading.Thread:
    """Запускает загрузку списков в фоне, чтобы не блокировать старт приложения."""
    def _run():
        asyncio.run(session.load_rosters())

    # Ворота закрываются до старта потока, чтобы запросы не проскочили раньше загрузки
    session.is_loading = True
    thread = threading.Thread(target=_run, name='roster-loader', daemon=True)
    thread.start()
    return thread
