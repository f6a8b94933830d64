# referral_service/services/referrals/referral_service.py
import uuid
from datetime import date, datetime, timezone
from typing import Optional, Dict, Any
from flask import current_app
from referral_service.db.database import db
from referral_service.models.referral import ReferralStatus
from referral_service.repositories import referral_repository
from referral_service.observability.metrics import (
    TOKENS_GRANTED,
    TOKENS_REDEEMED,
    REDEEM_REJECTED,
)


class ReferralError(Exception):
    """Error de dominio de referidos; status_code es el HTTP a devolver."""
    status_code = 400

    def __init__(self, message: str, **payload):
        super().__init__(message)
        self.message = message
        self.payload = payload

    def to_dict(self) -> Dict[str, Any]:
        return {"verified": False, "message": self.message, **self.payload}


class InvalidReferralToken(ReferralError):
    status_code = 404

    def __init__(self):
        super().__init__("Invalid referral token")


class ReferralAlreadyUsed(ReferralError):
    status_code = 409

    def __init__(self, status: str):
        super().__init__(f"Referral already {status}", status=status)


def grant_referral(sponsor_id: int, expiry: Optional[date] = None) -> Dict[str, Any]:
    """
    Emite un token nuevo (uuid4) en estado 'available' para el sponsor.
    expiry solo se devuelve; todavía no se guarda ni se aplica.
    """
    token = str(uuid.uuid4())
    try:
        referral_repository.insert_referral(sponsor_id, token)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    TOKENS_GRANTED.inc()
    current_app.logger.info("referral token emitido sponsor=%s", sponsor_id)
    return {
        "token": token,
        "status": ReferralStatus.available.value,
        "expiry": expiry.isoformat() if expiry else None,
    }


def get_tokens_for_sponsor(sponsor_id: int, status: Optional[str] = None) -> Dict[str, Any]:
    return {"tokens": referral_repository.list_by_sponsor(sponsor_id, status=status)}


def verify_referral(user_id: int, token: str) -> Dict[str, Any]:
    """
    Redime el token para user_id.

    La transición available -> used es un único UPDATE condicional, así que
    dos verificaciones simultáneas del mismo token no pueden ganar ambas.
    El sponsor_id sale del propio UPDATE (RETURNING).
    Si no se actualizó nada se lee el estado actual solo para dar el error.
    """
    now = datetime.now(timezone.utc)
    try:
        sponsor_id = referral_repository.redeem(token, user_id, now)
        redeemed = sponsor_id is not None
        if redeemed:
            db.session.commit()
        else:
            db.session.rollback()
    except Exception:
        db.session.rollback()
        raise

    if not redeemed:
        current = referral_repository.find_by_token(token)
        if current is None:
            REDEEM_REJECTED.labels(reason="invalid").inc()
            current_app.logger.warning("verify: token inválido user=%s", user_id)
            raise InvalidReferralToken()

        status = current["status"]
        if status == ReferralStatus.available.value:
            # available pero con user_id ya asignado: para el caller es un token usado
            status = ReferralStatus.used.value
        REDEEM_REJECTED.labels(reason="already_" + status).inc()
        current_app.logger.warning(
            "verify: token ya %s user=%s sponsor=%s", status, user_id, current["sponsor_id"]
        )
        raise ReferralAlreadyUsed(status)

    TOKENS_REDEEMED.inc()
    current_app.logger.info("referral redimido user=%s sponsor=%s", user_id, sponsor_id)
    return {
        "verified": True,
        "sponsor_id": sponsor_id,
        "updated": now.date().isoformat(),
    }


def is_user_referred(user_id: int) -> Dict[str, bool]:
    return {"referred": referral_repository.is_referred(user_id)}
