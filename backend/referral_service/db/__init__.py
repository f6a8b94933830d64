# referral_service/db/__init__.py
from .database import db, init_db

__all__ = ["db", "init_db"]
