"""
import_engine - CSV → blog post import pipeline.

Public API:
    run_import(file_content, store, uploads_dir=None) → ImportReport
    import_file(csv_path, store, uploads_dir=None)    → ImportReport
"""

from import_engine.importer import run_import, import_file      # noqa: F401
from import_engine.report import ImportReport                    # noqa: F401
from import_engine.slugs import generate_slug                    # noqa: F401
