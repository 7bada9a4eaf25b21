from abc import ABC, abstractmethod


class IRateLimiter(ABC):
    """Per-client admission control - application layer"""

    @abstractmethod
    def admit(self, client_identity: str) -> bool:
        """Consume one request from the client's allowance; False when exhausted"""
        pass
