import pytest
from sqlalchemy import create_engine, select, func

import cli
from db.models import BlogPost
from import_engine.errors import StoreWriteError
from services.sql_record_store import SqlRecordStore

pytestmark = pytest.mark.usefixtures("restore_logging")

CSV_TEXT = (
    "title,excerpt,category\n"
    "First,one,News\n"
    "Second,two,News\n"
    "Third,three,\n"
)


@pytest.fixture
def csv_file(tmp_path):
    p = tmp_path / "posts.csv"
    p.write_text(CSV_TEXT, encoding="utf-8")
    return p


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'cms.sqlite'}"


@pytest.fixture
def fail_second(monkeypatch):
    original = SqlRecordStore.create_record

    def create_record(self, payload):
        if payload.title == "Second":
            raise StoreWriteError("simulated write failure")
        return original(self, payload)

    monkeypatch.setattr(SqlRecordStore, "create_record", create_record)


def _post_count(db_url):
    engine = create_engine(db_url)
    try:
        with engine.connect() as conn:
            return conn.execute(select(func.count(BlogPost.id))).scalar_one()
    finally:
        engine.dispose()


def _argv(csv_file, db_url, tmp_path, *extra):
    return [str(csv_file), "--db", db_url, "--uploads-dir", str(tmp_path), *extra]


def test_imports_and_exits_zero(csv_file, db_url, tmp_path, capsys):
    assert cli.main(_argv(csv_file, db_url, tmp_path)) == 0

    out = capsys.readouterr().out
    assert "Created blog post: First" in out
    assert "Created blog post: Third" in out
    assert "CSV import completed successfully" in out
    assert _post_count(db_url) == 3


def test_partial_failure_still_exits_zero(csv_file, db_url, tmp_path, capsys, fail_second):
    assert cli.main(_argv(csv_file, db_url, tmp_path)) == 0

    captured = capsys.readouterr()
    assert "Error creating blog post Second: simulated write failure" in captured.err
    assert "Created blog post: Second" not in captured.out
    assert _post_count(db_url) == 2


def test_fail_on_error_exits_one(csv_file, db_url, tmp_path, fail_second):
    assert cli.main(_argv(csv_file, db_url, tmp_path, "--fail-on-error")) == 1
    assert _post_count(db_url) == 2


def test_fail_on_error_clean_run_exits_zero(csv_file, db_url, tmp_path):
    assert cli.main(_argv(csv_file, db_url, tmp_path, "--fail-on-error")) == 0


def test_missing_path_argument_exits_one(capsys):
    assert cli.main([]) == 1


def test_unreadable_csv_exits_one(tmp_path, db_url, capsys):
    assert cli.main([str(tmp_path / "nope.csv"), "--db", db_url]) == 1
    assert "CSV import failed" in capsys.readouterr().err


def test_header_only_csv_exits_zero(tmp_path, db_url):
    p = tmp_path / "empty.csv"
    p.write_text("title,slug\n", encoding="utf-8")

    assert cli.main([str(p), "--db", db_url, "--fail-on-error"]) == 0
    assert _post_count(db_url) == 0


def test_long_content_cell_exits_zero(tmp_path, db_url):
    p = tmp_path / "long.csv"
    p.write_text('title,content\nShort,ok\nLong,"' + "x" * 200_000 + '"\n', encoding="utf-8")

    assert cli.main([str(p), "--db", db_url]) == 0
    assert _post_count(db_url) == 2
