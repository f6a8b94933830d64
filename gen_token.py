# gen_token.py: imprime un access token de desarrollo
#   python gen_token.py 15          -> usuario 15
#   python gen_token.py 1 --admin   -> con claim de admin
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "backend"))

from flask_jwt_extended import create_access_token
from referral_service import create_app

user_id = sys.argv[1] if len(sys.argv) > 1 else "15"
rid = 1 if "--admin" in sys.argv else 2

app = create_app()
with app.app_context():
    print(create_access_token(identity=str(user_id), additional_claims={"rid": rid}))
