# referral_service/routes/waiting_list/waiting_list_routes.py
from flask import Blueprint, jsonify, request, current_app
from pydantic import ValidationError
from referral_service.schemas.referral import JoinQueueRequest, validation_details
from referral_service.services.waiting_list.waiting_list_service import join_queue

waiting_list_bp = Blueprint("waiting_list", __name__)


# POST/GET /joinQueue  (público, sin auth)
@waiting_list_bp.route("/joinQueue", methods=["GET", "POST"])
def join():
    if request.method == "GET":
        data = request.args.to_dict()
    else:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            data = request.form.to_dict()

    try:
        params = JoinQueueRequest.model_validate(data)
    except ValidationError as e:
        return jsonify({
            "ok": False,
            "error": "Invalid parameters",
            "details": validation_details(e),
        }), 400

    try:
        result = join_queue(params.email, params.phone, user_id=params.user_id)
    except Exception:
        current_app.logger.exception("Error inesperado en /joinQueue")
        return jsonify({"ok": False, "error": "Internal server error"}), 500
    return jsonify(result), 200
