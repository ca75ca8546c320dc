import os
from dotenv import load_dotenv

# Определяем путь к файлу .env.

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# Используем BASE_DIR для поиска файла .env
load_dotenv(os.path.join(BASE_DIR, '.env'))


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """
    Класс для хранения конфигурационных переменных.
    Загружает переменные из окружения (из файла .env).
    """
    # --- Источники списков учеников и тренеров (CSV) ---
    STUDENTS_CSV_URL = os.getenv(
        'STUDENTS_CSV_URL',
        'https://hebbkx1anhila5yf.public.blob.vercel-storage.com/students-1CGfw6jI4Kbxgt4OfupksyyexuLsjo.csv'
    )
    TEACHERS_CSV_URL = os.getenv(
        'TEACHERS_CSV_URL',
        'https://hebbkx1anhila5yf.public.blob.vercel-storage.com/teachers-IJ1SDMufncRF9JDeVg0W6zAueCPsZK.csv'
    )

    # Пустое значение означает "без таймаута", как в исходном приложении
    _fetch_timeout_raw = os.getenv('FETCH_TIMEOUT', '').strip()
    FETCH_TIMEOUT = float(_fetch_timeout_raw) if _fetch_timeout_raw else None

    EXPORT_FILE_NAME = os.getenv('EXPORT_FILE_NAME', '桌球課程記錄.csv')
    NOTIFIER_WORKERS = int(os.getenv('NOTIFIER_WORKERS', 1))
    LOAD_ROSTERS_ON_STARTUP = _env_flag('LOAD_ROSTERS_ON_STARTUP', True)

    # Проверка, что ключевые переменные загрузились
    if not STUDENTS_CSV_URL or not TEACHERS_CSV_URL:
        raise ValueError("Необходимо задать STUDENTS_CSV_URL и TEACHERS_CSV_URL в файле .env")
    if NOTIFIER_WORKERS < 1:
        raise ValueError("NOTIFIER_WORKERS должен быть положительным числом")
