# app/services/utils/enums.py

from enum import Enum


class LessonAction(Enum):
    """Действие над записью, о котором уведомляется ученик."""
    ADD = 'add'
    DELETE = 'delete'


class NoticeVariant(Enum):
    """Оформление всплывающего уведомления (обычное или ошибка)."""
    NORMAL = 'default'
    DESTRUCTIVE = 'destructive'
