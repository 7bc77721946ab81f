"""Create a user from the command line.

Usage: python scripts/create_user.py EMAIL PASSWORD [PHONE]
"""
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from forge import create_app
from forge.auth.schemas import RegisterRequest
from forge.errors import ForgeError
from forge.extensions import get_services

if len(sys.argv) not in (3, 4):
    print(__doc__.strip())
    sys.exit(2)

email, password = sys.argv[1], sys.argv[2]
phone = sys.argv[3] if len(sys.argv) == 4 else None

app = create_app()

with app.app_context():
    services = get_services()
    try:
        req = RegisterRequest.from_json({'email': email, 'password': password})
        user = services.credentials.create(req.email, services.hasher.hash(req.password), phone=phone)
    except ForgeError as e:
        print(f"Could not create user: {e.message}")
        sys.exit(1)

    print(f"Created user {user.email} (id {user.id})")
