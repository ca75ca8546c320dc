# app/services/core/notifier.py

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from threading import Lock
from typing import Optional, Set

from app.services.clients.roster_client import Rosters
from app.services.utils.enums import LessonAction

log = logging.getLogger(__name__)


def _send_notice(email: str, action: LessonAction):
    # Настоящей отправки писем нет: здесь должен быть вызов почтового API
    verb = 'added' if action is LessonAction.ADD else 'deleted'
    log.info(f"Sending email to {email}: Lesson {verb}")


def _deliver(email: str, action: LessonAction):
    try:
        _send_notice(email, action)
    except Exception as e:
        log.warning(f"Ошибка при отправке уведомления на {email}: {e}", exc_info=True)


class Notifier:
    """
    Уведомление ученика о добавлении/удалении занятия.
    Работает по принципу "отправил и забыл": вызывающий код не ждет результата,
    а ошибки только логируются.
    """

    def __init__(self, rosters: Rosters, max_workers: int = 1):
        self.rosters = rosters
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='notifier')
        self._pending: Set[Future] = set()
        self._lock = Lock()

    def notify(self, student_name: str, action: LessonAction) -> Optional[Future]:
        student = next((s for s in self.rosters.students if s.select_value == student_name), None)
        if student is None or not student.email:
            log.debug(f"Ученик '{student_name}' не найден в списке. Уведомление не отправлено.")
            return None

        try:
            future = self._executor.submit(_deliver, student.email, action)
        except RuntimeError as e:
            log.warning(f"Не удалось поставить уведомление в очередь: {e}")
            return None

        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return future

    def _forget(self, future: Future):
        with self._lock:
            self._pending.discard(future)

    def wait(self, timeout: Optional[float] = None):
        """Дожидается отправленных уведомлений. Вызывается явно, например в тестах."""
        with self._lock:
            pending = set(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def shutdown(self):
        self._executor.shutdown(wait=True)
