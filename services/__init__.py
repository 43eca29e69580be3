"""
services - Record store layer sitting between the import engine / API and DB.
"""

from services.record_store import RecordStore, AssetHandle       # noqa: F401
from services.sql_record_store import SqlRecordStore              # noqa: F401
