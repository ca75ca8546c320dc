# app/routes.py

import io
import logging
from functools import wraps
from flask import Blueprint, current_app, jsonify, request, send_file

from .services.core.session import SessionState
from .services.parsers.common_structs import FilterCriteria
from .services.utils.errors import ValidationError
from .utils import make_json_serializable

log = logging.getLogger(__name__)
bp = Blueprint('main', __name__)

APP_TITLE = '桌球課程記錄系統'


def get_session() -> SessionState:
    return current_app.extensions['lesson_session']


def requires_rosters(view):
    """Пока списки грузятся, форма не принимает ввод (аналог экрана "載入中...")."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if get_session().is_loading:
            return jsonify({"error": "載入中...", "is_loading": True}), 503
        return view(*args, **kwargs)
    return wrapped


def notices_payload(session: SessionState) -> list:
    return make_json_serializable(session.drain_notices())


@bp.route('/')
def index():
    session = get_session()
    return jsonify({
        "title": APP_TITLE,
        "is_loading": session.is_loading,
        "students": len(session.rosters.students),
        "teachers": len(session.rosters.teachers),
        "records": len(session.ledger),
    })


@bp.route('/export')
@requires_rosters
def export_csv():
    """Отдает отфильтрованные записи в виде CSV-файла."""
    session = get_session()
    if request.args:
        try:
            session.set_filter(FilterCriteria.from_args(request.args))
        except ValidationError as e:
            log.warning(f"Экспорт: {e}")
            return jsonify({"error": str(e)}), 400

    export_file = session.export()
    if export_file is None:
        return jsonify({"error": "nothing to export", "notices": notices_payload(session)}), 400

    log.info(f"Отдаю файл '{export_file.filename}'")
    return send_file(
        io.BytesIO(export_file.content),
        mimetype=export_file.mimetype,
        as_attachment=True,
        download_name=export_file.filename,
    )
