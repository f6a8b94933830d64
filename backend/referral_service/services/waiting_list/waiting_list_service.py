# referral_service/services/waiting_list/waiting_list_service.py
from typing import Optional
from flask import current_app
from referral_service.db.database import db
from referral_service.repositories import waiting_list_repository
from referral_service.observability.metrics import WAITING_LIST_JOINS


def join_queue(email: str, phone: str, user_id: Optional[int] = None) -> dict:
    # Sin validación de formato: se guarda lo que llega (append-only)
    try:
        waiting_list_repository.insert_entry(email, phone, user_id)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    WAITING_LIST_JOINS.inc()
    current_app.logger.info("lista de espera: alta email=%s user=%s", email, user_id)
    return {"success": True, "message": f"Added {email} to waiting list {phone}"}
