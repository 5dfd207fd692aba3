import hmac
from typing import Optional

import bcrypt

from config import ADMIN_ID, ADMIN_PASSWORD


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Accounts created without a password can never log in."""
    if not hashed_password:
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def verify_admin_credentials(admin_id: str, password: str) -> bool:
    # constant-time comparison on bytes; str arguments must be ASCII
    return (
        hmac.compare_digest(admin_id.encode("utf-8"), ADMIN_ID.encode("utf-8"))
        and hmac.compare_digest(password.encode("utf-8"), ADMIN_PASSWORD.encode("utf-8"))
    )
