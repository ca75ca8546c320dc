# app/services/clients/roster_client.py

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from app.services.parsers.common_structs import Student, Teacher
from app.services.parsers.csv_parser import parse_csv
from app.services.parsers.roster_parser import parse_students, parse_teachers
from app.services.utils.errors import RosterLoadError

log = logging.getLogger(__name__)


@dataclass
class Rosters:
    """Списки учеников и тренеров, загруженные один раз за сессию."""
    students: List[Student] = field(default_factory=list)
    teachers: List[Teacher] = field(default_factory=list)


def fetch_text(url: str, timeout: Optional[float] = None) -> str:
    """
    Скачивает CSV по URL и возвращает его как текст.
    Любая сетевая ошибка или не-текстовое тело превращается в RosterLoadError.
    """
    try:
        log.info(f"Скачиваю '{url}'...")
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        # utf-8-sig убирает BOM, если таблицу сохраняли из Excel
        return response.content.decode('utf-8-sig')
    except requests.exceptions.HTTPError as e:
        log.error(f"Сервер вернул ошибку для '{url}': {e}")
        raise RosterLoadError(f"HTTP error for {url}: {e}")
    except requests.exceptions.RequestException as e:
        log.error(f"Сетевая ошибка при скачивании '{url}': {e}")
        raise RosterLoadError(f"Network error for {url}: {e}")
    except UnicodeDecodeError as e:
        log.error(f"Ответ '{url}' не является текстом в UTF-8: {e}")
        raise RosterLoadError(f"Non-text body from {url}")


async def load_rosters(students_url: str, teachers_url: str, timeout: Optional[float] = None) -> Rosters:
    """
    Параллельно скачивает оба списка и ждет завершения обоих запросов.
    Частичный результат не применяется: если упал хотя бы один запрос,
    поднимается RosterLoadError.
    """
    results = await asyncio.gather(
        asyncio.to_thread(fetch_text, students_url, timeout),
        asyncio.to_thread(fetch_text, teachers_url, timeout),
        return_exceptions=True,
    )

    errors = [result for result in results if isinstance(result, BaseException)]
    if errors:
        for error in errors:
            if not isinstance(error, RosterLoadError):
                log.critical(f"Непредвиденная ошибка при загрузке списков: {error}", exc_info=error)
        raise RosterLoadError(f"Failed to load rosters: {errors[0]}")

    students_text, teachers_text = results
    return Rosters(
        students=parse_students(parse_csv(students_text)),
        teachers=parse_teachers(parse_csv(teachers_text)),
    )
