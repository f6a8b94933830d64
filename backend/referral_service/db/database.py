# referral_service/db/database.py
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def init_db(app):
    """
    Registra la extensión en la app. Si AUTO_CREATE_TABLES está activo
    (dev / tests) crea las tablas que falten; en producción el esquema lo
    gestionan las migraciones.
    """
    db.init_app(app)

    if app.config.get("AUTO_CREATE_TABLES"):
        # Importa los modelos para que queden registrados en el metadata
        from referral_service.models import referral, user, waiting_list  # noqa: F401

        with app.app_context():
            db.create_all()
        app.logger.info("Tablas verificadas/creadas (AUTO_CREATE_TABLES=1)")
