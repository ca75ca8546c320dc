from datetime import date

import pytest

from app import create_app
from app.services.core.session import SessionState
from app.services.parsers.common_structs import Student, Teacher

STUDENTS_CSV = (
    "序號,姓名,班級,email\n"
    "1,Alice,三年甲班,alice@example.com\n"
    "2,Carol,三年乙班,carol@example.com\n"
    ",,,\n"
)
TEACHERS_CSV = (
    "序號,姓名,時薪\n"
    "1,Bob,800\n"
    "2,Dan,1000\n"
)


@pytest.fixture
def session():
    """Сессия с уже загруженными списками."""
    session = SessionState(students_url="http://test/students.csv", teachers_url="http://test/teachers.csv")
    session.rosters.students[:] = [
        Student(id="1", name="Alice", class_name="三年甲班", email="alice@example.com"),
        Student(id="2", name="Carol", class_name="三年乙班", email="carol@example.com"),
    ]
    session.rosters.teachers[:] = [
        Teacher(id="1", name="Bob", hourly_rate="800"),
        Teacher(id="2", name="Dan", hourly_rate="1000"),
    ]
    session.is_loading = False
    yield session
    session.notifier.shutdown()


@pytest.fixture
def ledger(session):
    return session.ledger


@pytest.fixture
def sample_ledger(ledger):
    """Три записи из примера: Alice/Bob, Carol/Bob, Alice/Dan."""
    ledger.add("Alice", "Bob", 1, 0, date(2024, 1, 1))
    ledger.add("Carol", "Bob", 0, 30, date(2024, 1, 2))
    ledger.add("Alice", "Dan", 2, 0, date(2024, 1, 3))
    return ledger


@pytest.fixture
def app(session):
    return create_app({'TESTING': True, 'LOAD_ROSTERS_ON_STARTUP': False}, session=session)


@pytest.fixture
def client(app):
    return app.test_client()
