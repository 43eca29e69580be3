"""
db - Database layer.

Public API:
    init_db()       → create engine + tables
    get_session()   → new Session
    dispose_db()    → tear the engine down
    Category, Asset, BlogPost → ORM models
"""

from db.engine import init_db, get_session, dispose_db          # noqa: F401
from db.models import Base, Category, Asset, BlogPost           # noqa: F401
