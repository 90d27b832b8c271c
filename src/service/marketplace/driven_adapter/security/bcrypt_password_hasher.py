import bcrypt
from pydantic import SecretStr

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_password_hasher import IPasswordHasher


# bcrypt only looks at the first 72 bytes; current releases refuse longer input
BCRYPT_MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher(IPasswordHasher):
    """Concrete bcrypt implementation of IPasswordHasher"""

    def __init__(self, rounds: int | None = None) -> None:
        self.rounds = rounds if rounds is not None else settings.BCRYPT_ROUNDS

    def hash_password(self, *, plain_password: SecretStr) -> str:
        """Hash password using bcrypt with SecretStr for security"""
        password_bytes = plain_password.get_secret_value().encode('utf-8')
        if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValidationError(
                f'Password cannot be longer than {BCRYPT_MAX_PASSWORD_BYTES} bytes'
            )
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password_bytes, salt)
        return hashed.decode('utf-8')

    @Logger.io
    def verify_password(self, *, plain_password: SecretStr, hashed_password: str) -> bool:
        """Verify password using bcrypt with SecretStr for security"""
        password_bytes = plain_password.get_secret_value().encode('utf-8')
        if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))
        except (ValueError, TypeError, AttributeError):
            # Malformed or empty stored hash
            return False
