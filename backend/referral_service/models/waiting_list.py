# referral_service/models/waiting_list.py
from sqlalchemy import Column, Integer, BigInteger, String, DateTime
from sqlalchemy.sql import func
from referral_service.db.database import db


class WaitingListEntry(db.Model):
    __tablename__ = "waiting_list"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(32), nullable=False)
    # Opcional: si quien se apunta ya tiene cuenta
    user_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self) -> str:
        return f"<WaitingListEntry email={self.email} phone={self.phone} user={self.user_id}>"
