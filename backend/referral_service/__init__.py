# backend/referral_service/__init__.py
from flask import Flask
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from .routes import register_routes
from .db.database import init_db
from .cli import register_cli
from dotenv import load_dotenv
import os

def _as_bool(v, default=False):
    if v is None:
        return default
    return str(v).lower() in ("1", "true", "yes", "y", "on")

def create_app(config=None):
    load_dotenv()

    app = Flask(__name__)
    CORS(app)

    # =========================
    # Base de Datos
    # =========================
    app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv('DATABASE_URL', 'sqlite:///referrals.db')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['AUTO_CREATE_TABLES'] = _as_bool(os.getenv('AUTO_CREATE_TABLES'))

    # =========================
    # JWT y Secret Keys
    # =========================
    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'cambia-esta-clave-en-produccion')
    app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', app.config['JWT_SECRET_KEY'])
    app.config['ADMIN_ROLE_ID'] = int(os.getenv('ADMIN_ROLE_ID', '1'))

    # Overrides explícitos (tests / scripts)
    if config:
        app.config.update(config)

    app.logger.setLevel(os.getenv('LOG_LEVEL', 'INFO').upper())

    if app.config['JWT_SECRET_KEY'] == 'cambia-esta-clave-en-produccion':
        app.logger.warning("⚠ JWT_SECRET_KEY por defecto: configúralo en producción.")

    # =========================
    # Inicialización de dependencias
    # =========================
    try:
        init_db(app)
    except Exception as e:
        app.logger.error("❌ init_db() falló al arrancar: %s", e)
        raise

    JWTManager(app)

    register_routes(app)
    register_cli(app)

    return app
