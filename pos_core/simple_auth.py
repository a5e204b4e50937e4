"""Fixed-credential login check without external dependencies."""
import hashlib
import hmac
import logging

from pos_core import constants

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash password using SHA-256."""
    return hashlib.sha256(password.encode()).hexdigest()


def verify_login(username: str, password: str) -> bool:
    """Check a login against the configured username/password pair."""
    username = (username or "").strip()
    if not username or not password:
        return False
    ok = username == constants.POS_USERNAME and hmac.compare_digest(
        hash_password(password), hash_password(constants.POS_PASSWORD)
    )
    if not ok:
        logger.warning("Rejected login for %r", username)
    return ok
