# backend/wsgi.py: entrada de gunicorn para el servicio de referidos
import logging
import os

def _make_fallback(error):
    from flask import Flask, jsonify
    f = Flask(__name__)

    # Sin BD/config no se puede emitir ni redimir tokens: /healthz lo reporta como 503
    @f.get("/healthz")
    def _health():
        return jsonify(ok=False, fallback=True, error=str(error)), 503

    return f

# REFERRALS_FORCE_FALLBACK=1 sirve solo el /healthz degradado (mantenimiento de la BD de referidos)
if os.getenv("REFERRALS_FORCE_FALLBACK", "").lower() in {"1", "true", "yes"}:
    app = _make_fallback("forced")
else:
    try:
        from referral_service import create_app
        app = create_app()
    except Exception as _e:
        # Típicamente DATABASE_URL inválida o tablas referrals/waiting_list inaccesibles
        logging.getLogger("gunicorn.error").exception("create_app() del servicio de referidos falló")
        app = _make_fallback(_e)
