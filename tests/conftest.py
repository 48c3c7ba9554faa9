"""
Pytest configuration and fixtures for testing the blog backend.
"""

import os
import sys
import pytest
from faker import Faker

# Add the parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from radikal import create_app, db
from radikal.models import BlogPost

fake = Faker()


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client for each test function."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create a fresh database session for each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()
        yield db.session
        db.session.rollback()


@pytest.fixture
def make_post(db_session):
    """Factory for blog posts. Search tests pass explicit text fields."""
    def _make_post(**overrides):
        data = {
            'slug': fake.unique.slug(),
            'title': fake.sentence(nb_words=4),
            'excerpt': None,
            'content': fake.paragraph(),
            'published': True,
        }
        data.update(overrides)
        post = BlogPost(**data)
        db_session.add(post)
        db_session.commit()
        return post
    return _make_post


class FakeResponse:
    """Just enough of requests.Response for the DeepL client."""

    def __init__(self, status_code=200, payload=None, text=''):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError('No JSON body')
        return self._payload


class FakeDeepL:
    """Stands in for requests.post against the DeepL endpoint.

    Known texts come from `translations`; anything else is echoed back with
    the target language appended. `detected` maps texts to DeepL codes.
    """

    def __init__(self):
        self.calls = []
        self.translations = {}
        self.detected = {}
        self.status_code = 200
        self.error_body = ''
        self.exception = None

    def __call__(self, url, json=None, headers=None, timeout=None):
        self.calls.append({'url': url, 'json': json, 'headers': headers, 'timeout': timeout})
        if self.exception is not None:
            raise self.exception
        if self.status_code >= 400:
            return FakeResponse(self.status_code, text=self.error_body)

        target = json['target_lang']
        return FakeResponse(200, {'translations': [
            {
                'text': self.translations.get(text, f'{text} [{target}]'),
                'detected_source_language': self.detected.get(text, json.get('source_lang', 'RO')),
            }
            for text in json['text']
        ]})

    @property
    def sent_texts(self):
        return [call['json']['text'] for call in self.calls]


@pytest.fixture
def deepl(monkeypatch):
    """Replace the DeepL HTTP call with a recording fake."""
    fake_deepl = FakeDeepL()
    monkeypatch.setattr('radikal.services.deepl.requests.post', fake_deepl)
    return fake_deepl
