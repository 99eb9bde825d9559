import logging
import os

import click
from flask import Flask, jsonify

from config import Config
from extensions import db, migrate
from models import Photo, User
from models.photo import APPROVED
from routes import comments_api


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(comments_api)

    @app.route("/health")
    def health_check():
        return jsonify({"status": "healthy"})

    @app.cli.command("init-db")
    def init_db():
        """Create the gallery tables."""
        db.create_all()
        click.echo("Tables created")

    @app.cli.command("seed-demo")
    def seed_demo():
        """Insert a demo user with one approved photo."""
        db.create_all()
        user = User.query.filter_by(email="demo@example.com").first()
        if user is None:
            user = User(name="Demo", email="demo@example.com")
            db.session.add(user)
            db.session.flush()
        photo = Photo.query.filter_by(title="Demo photo", owner_id=user.id).first()
        if photo is None:
            photo = Photo(title="Demo photo", filename="demo.jpg", owner_id=user.id, status=APPROVED)
            db.session.add(photo)
        db.session.commit()
        click.echo(f"user_id={user.id} photo_id={photo.id}")

    return app


app = create_app()

if __name__ == "__main__":
    with app.app_context(): db.create_all()
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5001)), debug=True)
