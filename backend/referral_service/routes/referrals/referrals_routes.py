# referral_service/routes/referrals/referrals_routes.py
from flask import Blueprint, jsonify, request, current_app
from flask_jwt_extended import jwt_required
from pydantic import ValidationError
from referral_service.schemas.referral import (
    GrantRequest,
    CheckTokensQuery,
    validation_details,
)
from referral_service.security.identity import can_act_for, current_user_id
from referral_service.services.referrals.referral_service import (
    ReferralError,
    grant_referral,
    get_tokens_for_sponsor,
    verify_referral,
    is_user_referred,
)

referrals_bp = Blueprint("referrals", __name__)


def _request_params() -> dict:
    """GET -> query string; POST -> JSON o form. Mismo contrato en ambos."""
    if request.method == "GET":
        return request.args.to_dict()
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _invalid(err: ValidationError):
    return jsonify({
        "ok": False,
        "error": "Invalid parameters",
        "details": validation_details(err),
    }), 400


def _forbidden(sponsor_id: int):
    current_app.logger.warning(
        "acceso denegado: user=%s intentó operar como sponsor=%s",
        current_user_id(), sponsor_id,
    )
    return jsonify({"ok": False, "error": "Forbidden for this sponsor"}), 403


def _internal_error(where: str):
    current_app.logger.exception("Error inesperado en %s", where)
    return jsonify({"ok": False, "error": "Internal server error"}), 500


# POST/GET /grant?sponsor_id=N&expiry=2021-09-01
@referrals_bp.route("/grant", methods=["GET", "POST"])
@jwt_required()
def grant():
    try:
        params = GrantRequest.model_validate(_request_params())
    except ValidationError as e:
        return _invalid(e)

    if not can_act_for(params.sponsor_id):
        return _forbidden(params.sponsor_id)

    try:
        data = grant_referral(params.sponsor_id, expiry=params.expiry)
    except Exception:
        return _internal_error("/grant")
    return jsonify(data), 200


# GET /checkTokens/<sponsor_id>?status=all|available|used
@referrals_bp.get("/checkTokens/<int:sponsor_id>")
@jwt_required()
def check_tokens(sponsor_id: int):
    try:
        query = CheckTokensQuery.model_validate(request.args.to_dict())
    except ValidationError as e:
        return _invalid(e)

    # sponsor_id viene de la URL: solo se acepta si es el propio usuario (o admin)
    if not can_act_for(sponsor_id):
        return _forbidden(sponsor_id)

    try:
        data = get_tokens_for_sponsor(sponsor_id, status=query.status)
    except Exception:
        return _internal_error("/checkTokens")
    return jsonify(data), 200


# GET /verify/<user_id>/<token>
@referrals_bp.get("/verify/<int:user_id>/<token>")
@jwt_required()
def verify(user_id: int, token: str):
    try:
        data = verify_referral(user_id, token.strip())
    except ReferralError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception:
        return _internal_error("/verify")
    return jsonify(data), 200


# GET /isReferred/<user_id>  (público)
@referrals_bp.get("/isReferred/<int:user_id>")
def is_referred(user_id: int):
    try:
        data = is_user_referred(user_id)
    except Exception:
        return _internal_error("/isReferred")
    return jsonify(data), 200
