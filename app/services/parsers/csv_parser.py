# app/services/parsers/csv_parser.py

import logging
from typing import Dict, List, Optional

log = logging.getLogger(__name__)


def parse_csv(text: str) -> List[Dict[str, Optional[str]]]:
    """
    Разбирает простой CSV: первая строка - заголовок, далее значения через запятую.
    Кавычки и экранирование не поддерживаются.
    Недостающие поля получают None, полностью пустые строки отбрасываются.
    Пустой текст дает пустой список, а не ошибку.
    """
    if not text or not text.strip():
        log.warning("Получен пустой CSV. Возвращаю пустой список.")
        return []

    lines = text.split('\n')
    headers = [header.strip() for header in lines[0].split(',')]

    rows = []
    for line in lines[1:]:
        values = line.split(',')
        row = {}
        for index, header in enumerate(headers):
            row[header] = values[index].strip() if index < len(values) else None
        # Строка без единого непустого значения нам не нужна
        if any(row.values()):
            rows.append(row)

    log.info(f"CSV разобран: {len(rows)} строк, колонки: {headers}")
    return rows
