import os
from flask import Flask
import logging
from logging.handlers import RotatingFileHandler
from config import BASE_DIR

from .services.core.session import SessionState, start_background_load


def create_app(test_config=None, session=None):
    app = Flask(__name__)
    app.config.from_object('config.Config')
    if test_config:
        app.config.update(test_config)

    if not app.debug and not app.testing:
        logs_dir = os.path.join(BASE_DIR, 'logs')
        log_file = os.path.join(logs_dir, 'app.log')

        if not os.path.exists(logs_dir):
            os.makedirs(logs_dir)

        file_handler = RotatingFileHandler(log_file, maxBytes=10240, backupCount=10)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Приложение Table Tennis Tracker запущено')

    # Одна сессия на процесс: журнал живет, пока работает приложение
    if session is None:
        session = SessionState(
            students_url=app.config['STUDENTS_CSV_URL'],
            teachers_url=app.config['TEACHERS_CSV_URL'],
            fetch_timeout=app.config['FETCH_TIMEOUT'],
            notifier_workers=app.config['NOTIFIER_WORKERS'],
        )
        if app.config['LOAD_ROSTERS_ON_STARTUP']:
            app.extensions['roster_loader'] = start_background_load(session)
    app.extensions['lesson_session'] = session

    from . import routes
    app.register_blueprint(routes.bp)

    from . import api_routes
    app.register_blueprint(api_routes.bp)

    return app
