import os
import sys
from decimal import Decimal
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from models import db
from models.book import Book
from app.version import API_PREFIX


@pytest.fixture(scope='session')
def app_instance():
    os.environ['APP_ENV'] = 'testing'
    from app import create_app
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_TRACK_MODIFICATIONS=False
    )
    return app


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


def register(client, email='reader@example.com', password='correct-horse', first_name='Ada', last_name='Reader'):
    return client.post(f"{API_PREFIX}/auth/register", json={
        'email': email,
        'password': password,
        'first_name': first_name,
        'last_name': last_name,
    })


def login(client, email='reader@example.com', password='correct-horse'):
    return client.post(f"{API_PREFIX}/auth/login", json={'email': email, 'password': password})


@pytest.fixture()
def auth_headers(client):
    """Register a user and return ``headers(email=...)`` for bearer auth."""

    def _headers(email='reader@example.com'):
        register(client, email=email)
        token = login(client, email=email).get_json()['data']['access_token']
        return {'Authorization': f'Bearer {token}'}

    return _headers


@pytest.fixture()
def make_book(app):
    def _make(**overrides):
        fields = {
            'title': 'Dune',
            'author': 'Frank Herbert',
            'price': Decimal('10.00'),
            'stock_quantity': 10,
            'category': 'fiction',
        }
        fields.update(overrides)
        book = Book(**fields)
        db.session.add(book)
        db.session.commit()
        return book.id

    return _make
