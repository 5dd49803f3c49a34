"""SQLAlchemy models package.

Important: This project uses a single declarative Base defined in `db.py`.
Import `Base` from this package in all model modules.

Example:

    Base.metadata.create_all(...)

This keeps `Base.metadata` consistent across the app.
"""

from db import Base  # re-export a single shared Base

# Import models so they are registered with SQLAlchemy metadata on startup.
# This makes `Base.metadata.create_all()` create all tables for a fresh DB.
from models.operators import Operator  # noqa: F401
from models.countries import Country  # noqa: F401
from models.states import State  # noqa: F401
from models.cities import City  # noqa: F401
from models.identities import Identity, IdentitySecret  # noqa: F401
from models.entities import Entity  # noqa: F401
from models.users import User  # noqa: F401
