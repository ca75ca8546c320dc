# app/services/core/view_filter.py

import logging
from typing import Iterable, List

from app.services.parsers.common_structs import FilterCriteria, LessonRecord

log = logging.getLogger(__name__)


def filter_records(records: Iterable[LessonRecord], criteria: FilterCriteria) -> List[LessonRecord]:
    """
    Отбирает записи, подходящие под фильтр, сохраняя исходный порядок.
    Чистая функция: вызывается заново при каждом изменении журнала или фильтра.
    """
    filtered = [record for record in records if criteria.matches(record)]
    log.debug(f"Фильтр {criteria}: найдено {len(filtered)} записей")
    return filtered
