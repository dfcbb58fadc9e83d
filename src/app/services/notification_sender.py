from abc import ABC, abstractmethod


class INotificationSender(ABC):
    """Outbound notification channel - application layer"""

    @abstractmethod
    def is_configured(self) -> bool:
        """True when the channel can actually deliver messages"""
        pass

    @abstractmethod
    async def send_password_reset(self, email: str, link: str) -> bool:
        """Deliver a password reset link; returns whether it was delivered"""
        pass

    @abstractmethod
    async def send_welcome(self, email: str, name: str) -> None:
        """Best-effort welcome message; must not raise"""
        pass
