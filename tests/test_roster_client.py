"""Тесты загрузки списков по сети (requests замокан)."""

import asyncio
import threading
from unittest.mock import Mock, patch

import pytest
import requests

from app.services.clients import roster_client
from app.services.core import notices
from app.services.core.session import start_background_load
from app.services.utils.errors import RosterLoadError
from tests.conftest import STUDENTS_CSV, TEACHERS_CSV

STUDENTS_URL = "http://test/students.csv"
TEACHERS_URL = "http://test/teachers.csv"


def _response(body: bytes, status_error=None):
    response = Mock()
    response.content = body
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


def _fake_get(responses):
    def fake_get(url, timeout=None):
        result = responses[url]
        if isinstance(result, Exception):
            raise result
        return result
    return fake_get


class TestFetchText:

    def test_returns_decoded_text_without_bom(self):
        body = "\ufeff序號,姓名\n1,Alice\n".encode("utf-8")
        with patch.object(roster_client.requests, "get", return_value=_response(body)) as get:
            text = roster_client.fetch_text(STUDENTS_URL, timeout=3)
        assert text == "序號,姓名\n1,Alice\n"
        get.assert_called_once_with(STUDENTS_URL, timeout=3)

    def test_http_error(self):
        error = requests.exceptions.HTTPError("404 Not Found")
        with patch.object(roster_client.requests, "get", return_value=_response(b"", error)):
            with pytest.raises(RosterLoadError):
                roster_client.fetch_text(STUDENTS_URL)

    def test_network_error(self):
        with patch.object(roster_client.requests, "get", side_effect=requests.exceptions.ConnectionError("down")):
            with pytest.raises(RosterLoadError):
                roster_client.fetch_text(STUDENTS_URL)

    def test_binary_body(self):
        with patch.object(roster_client.requests, "get", return_value=_response(b"\xff\xfe\x00\xd8")):
            with pytest.raises(RosterLoadError):
                roster_client.fetch_text(STUDENTS_URL)


class TestLoadRosters:

    def test_both_lists_are_parsed(self):
        responses = {
            STUDENTS_URL: _response(STUDENTS_CSV.encode("utf-8")),
            TEACHERS_URL: _response(TEACHERS_CSV.encode("utf-8")),
        }
        with patch.object(roster_client.requests, "get", side_effect=_fake_get(responses)):
            rosters = asyncio.run(roster_client.load_rosters(STUDENTS_URL, TEACHERS_URL))
        assert [s.name for s in rosters.students] == ["Alice", "Carol"]
        assert [t.name for t in rosters.teachers] == ["Bob", "Dan"]

    def test_one_failure_fails_everything(self):
        responses = {
            STUDENTS_URL: _response(STUDENTS_CSV.encode("utf-8")),
            TEACHERS_URL: requests.exceptions.Timeout("slow"),
        }
        with patch.object(roster_client.requests, "get", side_effect=_fake_get(responses)):
            with pytest.raises(RosterLoadError):
                asyncio.run(roster_client.load_rosters(STUDENTS_URL, TEACHERS_URL))


class TestSessionLoadRosters:

    def test_success_fills_rosters_and_opens_gate(self, session):
        session.rosters.students.clear()
        session.rosters.teachers.clear()
        session.is_loading = True
        responses = {
            STUDENTS_URL: _response(STUDENTS_CSV.encode("utf-8")),
            TEACHERS_URL: _response(TEACHERS_CSV.encode("utf-8")),
        }
        with patch.object(roster_client.requests, "get", side_effect=_fake_get(responses)):
            asyncio.run(session.load_rosters())

        assert session.is_loading is False
        assert len(session.rosters.students) == 2
        assert len(session.rosters.teachers) == 2
        # Журнал видит тот же объект со списками
        assert session.ledger.rosters is session.rosters
        assert session.drain_notices() == []

    def test_both_requests_failing_leaves_rosters_empty(self, session):
        with patch.object(roster_client.requests, "get",
                          side_effect=requests.exceptions.ConnectionError("offline")):
            asyncio.run(session.load_rosters())

        assert session.rosters.students == []
        assert session.rosters.teachers == []
        assert session.is_loading is False
        assert session.drain_notices() == [notices.ROSTER_LOAD_FAILED]


class TestConcurrentFetch:

    def test_both_requests_are_in_flight_together(self):
        # Барьер отпустит запросы, только если оба уже выполняются
        barrier = threading.Barrier(2, timeout=5)
        bodies = {STUDENTS_URL: STUDENTS_CSV.encode("utf-8"), TEACHERS_URL: TEACHERS_CSV.encode("utf-8")}

        def fake_get(url, timeout=None):
            barrier.wait()
            return _response(bodies[url])

        with patch.object(roster_client.requests, "get", side_effect=fake_get):
            rosters = asyncio.run(roster_client.load_rosters(STUDENTS_URL, TEACHERS_URL))

        assert len(rosters.students) == 2
        assert len(rosters.teachers) == 2


class TestBackgroundLoad:

    def test_gate_is_closed_until_load_finishes(self, session):
        release = threading.Event()
        bodies = {STUDENTS_URL: STUDENTS_CSV.encode("utf-8"), TEACHERS_URL: TEACHERS_CSV.encode("utf-8")}

        def slow_get(url, timeout=None):
            release.wait(timeout=5)
            return _response(bodies[url])

        session.rosters.students.clear()
        session.rosters.teachers.clear()
        with patch.object(roster_client.requests, "get", side_effect=slow_get):
            thread = start_background_load(session)
            assert session.is_loading is True
            release.set()
            thread.join(timeout=10)

        assert not thread.is_alive()
        assert session.is_loading is False
        assert [s.name for s in session.rosters.students] == ["Alice", "Carol"]

    def test_failed_background_load_reports_once(self, session):
        with patch.object(roster_client.requests, "get",
                          side_effect=requests.exceptions.ConnectionError("offline")):
            start_background_load(session).join(timeout=10)

        assert session.is_loading is False
        assert session.rosters.students == []
        assert session.drain_notices() == [notices.ROSTER_LOAD_FAILED]
