from abc import ABC, abstractmethod

from pydantic import SecretStr


class IPasswordHasher(ABC):
    """Abstract interface for password hashing operations"""

    @abstractmethod
    def hash_password(self, *, plain_password: SecretStr) -> str:
        """One-way hash with a fresh salt embedded in the returned text"""
        pass

    @abstractmethod
    def verify_password(self, *, plain_password: SecretStr, hashed_password: str) -> bool:
        """Constant-time check; a malformed hash verifies as False instead of raising"""
        pass
