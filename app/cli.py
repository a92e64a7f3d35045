import os
import click
from flask import current_app
from flask.cli import with_appcontext
from models import db
from models.book import Book
from app.services.books import create_book
from app.utils import transactional


SAMPLE_BOOKS = [
    {
        "title": "The Pragmatic Programmer",
        "author": "David Thomas, Andrew Hunt",
        "isbn": "9780135957059",
        "description": "Journey to mastery for software developers.",
        "price": "49.99",
        "stock_quantity": 25,
        "category": "programming",
        "publication_year": 2019,
        "publisher": "Addison-Wesley",
    },
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "isbn": "9780441172719",
        "description": "A desert planet, a noble family and the spice melange.",
        "price": "10.99",
        "stock_quantity": 40,
        "category": "fiction",
        "publication_year": 1965,
        "publisher": "Chilton Books",
    },
    {
        "title": "Sapiens",
        "author": "Yuval Noah Harari",
        "isbn": "9780062316097",
        "description": "A brief history of humankind.",
        "price": "18.50",
        "stock_quantity": 15,
        "category": "history",
        "publication_year": 2011,
        "publisher": "Harper",
    },
    {
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "isbn": "9780132350884",
        "description": "A handbook of agile software craftsmanship.",
        "price": "37.99",
        "stock_quantity": 0,
        "category": "programming",
        "publication_year": 2008,
        "publisher": "Prentice Hall",
    },
]


def _assert_not_production():
    app_env = (os.getenv("APP_ENV") or "").lower()
    if app_env == "production" and (os.getenv("ALLOW_DB_SEED") or "").lower() not in ("1", "true", "yes"):
        raise click.ClickException("Refusing to seed a production database without ALLOW_DB_SEED=true")


@click.command("init-db")
@click.option("--drop", is_flag=True, help="Drop all tables before creating them")
@with_appcontext
def init_db(drop):
    """Create the database tables for the configured database."""
    if drop:
        _assert_not_production()
        db.drop_all()
        click.echo("Dropped all tables.")
    db.create_all()
    click.echo(f"Tables created on {current_app.config['SQLALCHEMY_DATABASE_URI']}.")


@click.command("seed-books")
@with_appcontext
def seed_books():
    """Insert the sample catalog, skipping books whose ISBN already exists."""
    _assert_not_production()
    created = 0
    with transactional("Failed to seed books"):
        for fields in SAMPLE_BOOKS:
            if Book.query.filter_by(isbn=fields["isbn"]).first():
                continue
            create_book(**fields)
            created += 1
    click.echo(f"Seeded {created} book(s).")


def register_cli(app):
    app.cli.add_command(init_db)
    app.cli.add_command(seed_books)
