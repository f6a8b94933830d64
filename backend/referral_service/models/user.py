# referral_service/models/user.py
from referral_service.db.database import db

class User(db.Model):
    """
    Tabla de usuarios (la gestiona el servicio de cuentas).
    Aquí solo se lee para mostrar el username de quien redimió un token.
    """
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(100), unique=True, nullable=False)
