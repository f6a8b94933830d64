# referral_service/repositories/waiting_list_repository.py
from typing import Optional
from sqlalchemy import select, func
from referral_service.db.database import db
from referral_service.models.waiting_list import WaitingListEntry


def insert_entry(email: str, phone: str, user_id: Optional[int] = None) -> WaitingListEntry:
    entry = WaitingListEntry(email=email, phone=phone, user_id=user_id)
    db.session.add(entry)
    db.session.flush()
    return entry


def count_entries(email: Optional[str] = None) -> int:
    stmt = select(func.count()).select_from(WaitingListEntry)
    if email:
        stmt = stmt.where(WaitingListEntry.email == email)
    return int(db.session.execute(stmt).scalar() or 0)
