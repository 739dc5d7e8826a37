import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from medcase_app import create_app, db
from medcase_app.config import Config
from medcase_app.models import MedicalCase


class TestConfig(Config):
    __test__ = False

    TESTING = True
    SECRET_KEY = 'test-secret'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    LOG_LEVEL = 'WARNING'
    LOG_DIR = None


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_case(app):
    """Factory inserting a MedicalCase and returning it."""

    def _make_case(options=('A', 'B', 'C', 'D'), correct_index=2, feedbacks=None,
                   short_tips=None, points=None, title='Caso clínico'):
        case = MedicalCase(
            title=title,
            answer_options=list(options) if options is not None else None,
            answer_feedbacks=list(feedbacks) if feedbacks is not None else None,
            answer_short_tips=list(short_tips) if short_tips is not None else None,
            correct_answer_index=correct_index,
            points=points,
            explanation='Explicação do caso.',
        )
        db.session.add(case)
        db.session.commit()
        return case

    return _make_case
