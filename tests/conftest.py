import os
import sys

import pytest

# Ensure the project root is on sys.path so tests can import app
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import create_app
from config import TestConfig
from extensions import db
from models import Comment, CommentLike, Photo, User
from models.photo import APPROVED, PENDING

API = '/gallery_comments_api'


@pytest.fixture
def app():
    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
        db.session.add_all([
            User(id=1, name='Ayse', email='ayse@example.com', profile_photo='https://cdn.example.com/ayse.jpg'),
            User(id=2, name='Mehmet', email='mehmet@example.com'),
            User(id=3, name='Zeynep', email='zeynep@example.com'),
        ])
        db.session.commit()
        db.session.add_all([
            Photo(id=5, title='Sunset', filename='sunset.jpg', owner_id=1, status=APPROVED),
            Photo(id=6, title='Draft', filename='draft.jpg', owner_id=1, status=PENDING),
            Photo(id=7, title='Harbour', filename='harbour.jpg', owner_id=2, status=APPROVED),
        ])
        db.session.commit()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def api(client):
    """Call the comments endpoint the way the mobile client does."""
    def call(action, method='POST', **params):
        params = {key: str(value) for key, value in params.items()}
        params['action'] = action
        if method == 'GET':
            return client.get(API, query_string=params)
        return client.post(API, data=params)
    return call


@pytest.fixture
def fetch(app):
    def get(model, ident):
        with app.app_context():
            obj = db.session.get(model, ident)
            if obj is not None:
                db.session.expunge(obj)
            return obj
    return get


@pytest.fixture
def make_comment(app):
    """Insert a comment row directly, bypassing the API."""
    def make(**fields):
        fields.setdefault('photo_id', 5)
        fields.setdefault('user_id', 1)
        fields.setdefault('content', 'hello')
        with app.app_context():
            comment = Comment(**fields)
            db.session.add(comment)
            db.session.commit()
            return comment.id
    return make


@pytest.fixture
def like_rows(app):
    def count(comment_id, user_id=None):
        with app.app_context():
            query = CommentLike.query.filter_by(comment_id=comment_id)
            if user_id is not None:
                query = query.filter_by(user_id=user_id)
            return query.count()
    return count
