from sqlalchemy import Column, Integer, BigInteger, String, ForeignKey, DateTime, Enum
from sqlalchemy.sql import func
from referral_service.db.database import db
import enum

# ===== Enum Python (mapea al tipo ENUM referral_status de Postgres) =====
class ReferralStatus(str, enum.Enum):
    available = "available"
    used = "used"

# ============================== Models ==============================

class Referral(db.Model):
    __tablename__ = "referrals"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True)
    token = Column(String(36), nullable=False, unique=True, index=True)
    sponsor_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Queda NULL hasta que alguien redime el token
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    status = Column(
        Enum(ReferralStatus, name="referral_status"),
        nullable=False,
        default=ReferralStatus.available,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<Referral token={self.token} sponsor={self.sponsor_id} status={self.status}>"
