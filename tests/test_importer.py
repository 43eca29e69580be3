import pytest
from sqlalchemy import select

from db.models import Asset, BlogPost, Category
from import_engine import import_file, run_import
from import_engine.errors import StoreWriteError
from services.sql_record_store import SqlRecordStore

THREE_ROWS = (
    "title,category,featuredImage\n"
    "First,Travel,hero.png\n"
    "Second,Brand New,\n"
    "Third,Travel,missing.png\n"
)


class FailOnTitle(SqlRecordStore):
    """Store whose create_record fails for one title."""

    def __init__(self, *args, fail_title, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_title = fail_title

    def create_record(self, payload):
        if payload.title == self.fail_title:
            raise StoreWriteError("simulated write failure")
        return super().create_record(payload)


def _titles(session):
    return session.execute(select(BlogPost.title).order_by(BlogPost.id)).scalars().all()


def test_imports_every_row(db_session, store, uploads_dir):
    report = run_import(THREE_ROWS, store, uploads_dir=uploads_dir)

    assert report.ok
    assert report.total_rows == 3
    assert report.imported == 3
    assert [c["title"] for c in report.created] == ["First", "Second", "Third"]
    assert _titles(db_session) == ["First", "Second", "Third"]

    posts = {p.title: p for p in db_session.execute(select(BlogPost)).scalars()}
    assert posts["First"].featured_image is not None
    assert posts["Third"].featured_image is None
    assert posts["First"].category_id == posts["Third"].category_id
    assert posts["First"].slug == "first"


def test_failed_row_does_not_stop_the_run(db_session, assets_dir, uploads_dir):
    store = FailOnTitle(db_session, assets_dir=assets_dir, fail_title="Second")

    report = run_import(THREE_ROWS, store, uploads_dir=uploads_dir)

    assert _titles(db_session) == ["First", "Third"]
    assert report.imported == 2
    assert report.skipped == 1
    assert report.errors == [
        {"row": 3, "title": "Second", "reason": "simulated write failure"},
    ]


def test_failed_row_rolls_back_its_category(db_session, assets_dir, uploads_dir):
    store = FailOnTitle(db_session, assets_dir=assets_dir, fail_title="Second")

    run_import(THREE_ROWS, store, uploads_dir=uploads_dir)

    names = db_session.execute(select(Category.name)).scalars().all()
    assert names == ["Travel"]


def test_rejected_upload_is_a_row_error(db_session, store, uploads_dir):
    (uploads_dir / "notes.txt").write_text("not an image")
    csv_text = "title,featuredImage\nOne,notes.txt\nTwo,\n"

    report = run_import(csv_text, store, uploads_dir=uploads_dir)

    assert _titles(db_session) == ["Two"]
    assert report.errors[0]["row"] == 2
    assert report.errors[0]["title"] == "One"
    assert "unsupported type" in report.errors[0]["reason"]


def test_unexpected_exception_is_caught(db_session, assets_dir, uploads_dir):
    class Exploding(SqlRecordStore):
        def create_record(self, payload):
            raise KeyError("boom")

    report = run_import("title\nA\n", Exploding(db_session, assets_dir=assets_dir),
                        uploads_dir=uploads_dir)

    assert report.imported == 0
    assert report.errors[0]["reason"].startswith("Unexpected:")


def test_header_only_csv(db_session, store, uploads_dir):
    report = run_import("title,slug,excerpt\n", store, uploads_dir=uploads_dir)

    assert report.total_rows == 0
    assert report.imported == 0
    assert report.errors == []
    assert _titles(db_session) == []


def test_empty_file_reports_error(store, uploads_dir):
    report = run_import(b"", store, uploads_dir=uploads_dir)

    assert report.errors == [
        {"row": 0, "title": "", "reason": "CSV has no header row or is empty"},
    ]


def test_import_file_reads_from_disk(tmp_path, db_session, store, uploads_dir):
    path = tmp_path / "posts.csv"
    path.write_text("title;excerpt\nA;first\n", encoding="utf-8")

    report = import_file(path, store, uploads_dir=uploads_dir, delimiter=";")

    assert report.imported == 1
    assert _titles(db_session) == ["A"]


def test_import_file_missing_path_raises(tmp_path, store):
    with pytest.raises(FileNotFoundError):
        import_file(tmp_path / "nope.csv", store)


def test_long_content_cell_is_imported(db_session, store, uploads_dir):
    body = "x" * 200_000
    csv_text = f'title,content\nShort,ok\nLong,"{body}"\n'

    report = run_import(csv_text, store, uploads_dir=uploads_dir)

    assert report.ok
    assert _titles(db_session) == ["Short", "Long"]
    long_post = db_session.execute(
        select(BlogPost).where(BlogPost.title == "Long")
    ).scalar_one()
    assert len(long_post.content) == 200_000


def test_failed_row_removes_its_stored_image(db_session, assets_dir, uploads_dir):
    store = FailOnTitle(db_session, assets_dir=assets_dir, fail_title="First")

    report = run_import(THREE_ROWS, store, uploads_dir=uploads_dir)

    assert report.errors[0]["title"] == "First"
    assert db_session.execute(select(Asset)).scalars().all() == []
    assert [p for p in assets_dir.rglob("*") if p.is_file()] == []


def test_committed_image_kept_when_later_row_fails(db_session, assets_dir, uploads_dir):
    (uploads_dir / "again.png").write_bytes((uploads_dir / "hero.png").read_bytes())
    csv_text = "title,featuredImage\nOne,hero.png\nTwo,again.png\n"
    store = FailOnTitle(db_session, assets_dir=assets_dir, fail_title="Two")

    run_import(csv_text, store, uploads_dir=uploads_dir)

    asset = db_session.execute(select(Asset)).scalar_one()
    assert (assets_dir / asset.storage_path).is_file()
