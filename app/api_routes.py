# app/api_routes.py

import logging
from datetime import datetime
from flask import Blueprint, jsonify, request

from .routes import get_session, notices_payload, requires_rosters
from .services.core import notices
from .services.core.session import LessonForm
from .services.parsers.common_structs import FilterCriteria
from .services.utils.errors import ValidationError
from .utils import make_json_serializable


bp = Blueprint('api', __name__, url_prefix='/api')
log = logging.getLogger(__name__)


def _record_to_json(record) -> dict:
    data = make_json_serializable(record)
    data["duration"] = record.duration_display
    return data


@bp.route('/rosters')
@requires_rosters
def get_rosters():
    """Списки учеников и тренеров для выпадающих списков формы."""
    session = get_session()
    return jsonify({
        "students": [
            dict(make_json_serializable(s), value=s.select_value, label=s.label)
            for s in session.rosters.students
        ],
        "teachers": [
            dict(make_json_serializable(t), value=t.select_value, label=t.label)
            for t in session.rosters.teachers
        ],
    })


@bp.route('/lessons', methods=['GET'])
@requires_rosters
def list_lessons():
    """Отфильтрованные записи. Параметры запроса заменяют текущий фильтр."""
    session = get_session()
    if request.args:
        try:
            session.set_filter(FilterCriteria.from_args(request.args))
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

    records = session.filtered_records()
    return jsonify({
        "criteria": make_json_serializable(session.criteria),
        "records": [_record_to_json(r) for r in records],
    })


@bp.route('/lessons', methods=['POST'])
@requires_rosters
def add_lesson():
    session = get_session()
    payload = request.get_json(silent=True) or {}

    # Каждый запрос заполняет свою форму; пустая дата означает "сегодня"
    form = LessonForm(
        student=str(payload.get('student') or ''),
        teacher=str(payload.get('teacher') or ''),
    )
    form.set_hours(payload.get('hours'))
    form.set_minutes(payload.get('minutes'))
    if payload.get('date'):
        try:
            form.date = datetime.strptime(str(payload['date']), '%Y-%m-%d').date()
        except ValueError:
            log.warning(f"API: некорректная дата '{payload['date']}'")
            session.push_notice(notices.VALIDATION_FAILED)
            return jsonify({"error": "invalid date", "notices": notices_payload(session)}), 400

    record_id = session.submit_form(form)
    if record_id is None:
        return jsonify({"error": "validation failed", "notices": notices_payload(session)}), 400

    log.info(f"API: добавлена запись {record_id}")
    return jsonify({
        "record": _record_to_json(session.ledger.get(record_id)),
        "notices": notices_payload(session),
    }), 201


@bp.route('/lessons/<record_id>', methods=['DELETE'])
@requires_rosters
def delete_lesson(record_id):
    session = get_session()
    removed = session.delete_record(record_id)
    if removed is None:
        return jsonify({"error": "Record not found"}), 404
    return jsonify({"record": _record_to_json(removed), "notices": notices_payload(session)})


@bp.route('/filter/reset', methods=['POST'])
def reset_filter():
    session = get_session()
    session.reset_filter()
    return jsonify({"criteria": make_json_serializable(session.criteria)})


@bp.route('/notices')
def get_notices():
    return jsonify(notices_payload(get_session()))
