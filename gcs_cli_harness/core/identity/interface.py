from abc import ABC, abstractmethod


class IdentityProvider(ABC):
    """Supplies the service-account identity that signing commands act as"""

    @abstractmethod
    def get_identity_email(self) -> str:
        """
        Return the identity email to impersonate

        Raises:
            ConfigError: When the identity cannot be determined
        """
        pass


class StaticIdentityProvider(IdentityProvider):
    """Identity provider returning a fixed email"""

    def __init__(self, email: str):
        if not email:
            raise ValueError("email is required")
        self._email = email

    def get_identity_email(self) -> str:
        return self._email
