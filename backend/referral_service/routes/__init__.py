# referral_service/routes/__init__.py
from flask import Blueprint
from referral_service.routes.referrals.referrals_routes import referrals_bp
from referral_service.routes.waiting_list.waiting_list_routes import waiting_list_bp

health_bp = Blueprint("health", __name__)

@health_bp.get("/healthz")
def healthz():
    return {"ok": True}, 200

@health_bp.get("/metrics")
def metrics():
    from referral_service.observability.metrics import metrics_http_response
    return metrics_http_response()

def register_routes(app):
    app.register_blueprint(referrals_bp)
    app.register_blueprint(waiting_list_bp)
    app.register_blueprint(health_bp)
