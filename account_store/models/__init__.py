"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - Models imported here so Base.metadata knows every table before create_all
"""

from account_store.models.user import User  # noqa: F401
