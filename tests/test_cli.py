from models.book import Book
from app.cli import SAMPLE_BOOKS


def test_seed_books_is_repeatable(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['seed-books'])
    assert result.exit_code == 0, result.output
    assert f"Seeded {len(SAMPLE_BOOKS)} book(s)." in result.output
    assert Book.query.count() == len(SAMPLE_BOOKS)

    again = runner.invoke(args=['seed-books'])
    assert "Seeded 0 book(s)." in again.output
    assert Book.query.count() == len(SAMPLE_BOOKS)


def test_init_db_creates_tables(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['init-db'])
    assert result.exit_code == 0, result.output
    assert 'Tables created' in result.output
