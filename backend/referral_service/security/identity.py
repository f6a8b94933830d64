# referral_service/security/identity.py
from flask import current_app
from flask_jwt_extended import get_jwt_identity, get_jwt

def _to_int(value, default=None):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default

def current_user_id() -> int | None:
    """id del usuario autenticado. Acepta identity "15" o {"id": 15} (tokens viejos)."""
    identity = get_jwt_identity()
    if isinstance(identity, dict):
        identity = identity.get("id")
    return _to_int(identity)

def is_admin() -> bool:
    claims = get_jwt() or {}
    admin_rid = _to_int(current_app.config.get("ADMIN_ROLE_ID"), 1)
    return _to_int(claims.get("rid"), 2) == admin_rid

def can_act_for(user_id: int) -> bool:
    """El caller solo opera sobre sus propios datos, salvo admin."""
    return is_admin() or current_user_id() == int(user_id)
