# referral_service/repositories/referral_repository.py
from datetime import datetime
from typing import List, Dict, Any, Optional
from sqlalchemy import select, update, exists
from referral_service.db.database import db
from referral_service.models.referral import Referral, ReferralStatus
from referral_service.models.user import User


def _status_value(v) -> Optional[str]:
    if v is None:
        return None
    return v.value if isinstance(v, ReferralStatus) else str(v)


def _date_only(v) -> Optional[str]:
    # Postgres devuelve datetime; SQLite puede devolver texto "YYYY-MM-DD HH:MM:SS"
    if v is None:
        return None
    if hasattr(v, "isoformat"):
        return v.isoformat()[:10]
    return str(v)[:10]


def insert_referral(sponsor_id: int, token: str) -> Referral:
    ref = Referral(sponsor_id=sponsor_id, token=token, status=ReferralStatus.available)
    db.session.add(ref)
    db.session.flush()
    return ref


def list_by_sponsor(sponsor_id: int, status: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Tokens emitidos por un sponsor, con el username de quien lo redimió
    (LEFT JOIN: los disponibles salen con username NULL).
    """
    stmt = (
        select(
            Referral.token,
            Referral.created_at,
            User.username,
            Referral.status,
        )
        .select_from(Referral)
        .outerjoin(User, User.id == Referral.user_id)
        .where(Referral.sponsor_id == sponsor_id)
    )
    if status and status != "all":
        stmt = stmt.where(Referral.status == ReferralStatus(status))
    stmt = stmt.order_by(Referral.created_at.desc(), Referral.id.desc())

    rows = db.session.execute(stmt).mappings().all()
    out: List[Dict[str, Any]] = []
    for r in rows:
        out.append({
            "token": r["token"],
            "created": _date_only(r["created_at"]),
            "username": r["username"],
            "status": _status_value(r["status"]),
        })
    return out


def redeem(token: str, user_id: int, when: datetime) -> Optional[int]:
    """
    Compare-and-set: pasa a 'used' solo si sigue 'available' y sin user_id.
    Una única sentencia UPDATE ... RETURNING; la atomicidad por fila la da la BD.
    Devuelve el sponsor_id si esta llamada fue la que redimió el token, si no None.
    """
    stmt = (
        update(Referral)
        .where(
            Referral.token == token,
            Referral.status == ReferralStatus.available,
            Referral.user_id.is_(None),
        )
        .values(status=ReferralStatus.used, user_id=user_id, updated_at=when)
        .returning(Referral.sponsor_id)
        .execution_options(synchronize_session=False)
    )
    row = db.session.execute(stmt).first()
    return row[0] if row else None


def find_by_token(token: str) -> Optional[Dict[str, Any]]:
    row = db.session.execute(
        select(
            Referral.token,
            Referral.sponsor_id,
            Referral.user_id,
            Referral.status,
            Referral.updated_at,
        ).where(Referral.token == token)
    ).mappings().first()
    if not row:
        return None
    return {
        "token": row["token"],
        "sponsor_id": row["sponsor_id"],
        "user_id": row["user_id"],
        "status": _status_value(row["status"]),
        "updated_at": row["updated_at"],
    }


def is_referred(user_id: int) -> bool:
    stmt = select(
        exists().where(
            Referral.user_id == user_id,
            Referral.status == ReferralStatus.used,
        )
    )
    return bool(db.session.execute(stmt).scalar())
