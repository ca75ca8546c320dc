# app/services/utils/errors.py


class LedgerError(Exception):
    """Базовая ошибка журнала занятий."""


class ValidationError(LedgerError):
    """Данные формы не прошли проверку (не выбран ученик/тренер, нулевая длительность и т.п.)."""


class RosterLoadError(LedgerError):
    """Не удалось скачать или прочитать списки учеников и тренеров."""
