import logging
import threading
from abc import ABC, abstractmethod
from collections import defaultdict

logger = logging.getLogger(__name__)


class Vault(ABC):
    """ Moves value in and out of escrow. The ledger treats it as opaque. """

    @abstractmethod
    def escrow(self, amount: int):
        raise NotImplementedError

    @abstractmethod
    def release(self, amount: int, recipient: str) -> bool:
        raise NotImplementedError

    @property
    @abstractmethod
    def balance(self) -> int:
        raise NotImplementedError


class MemoryVault(Vault):
    """ Keeps the escrowed balance and per-recipient payouts in memory. """

    def __init__(self, refused_recipients=()):
        self._balance = 0
        self.payouts = defaultdict(int)
        self.refused_recipients = set(refused_recipients)
        self._lock = threading.Lock()

    def escrow(self, amount: int):
        if amount <= 0:
            raise ValueError("Escrowed amount must be positive, found %d" % amount)
        with self._lock:
            self._balance += amount

    def release(self, amount: int, recipient: str) -> bool:
        with self._lock:
            if recipient in self.refused_recipients:
                logger.warning("Recipient %s refused a payout of %d", recipient, amount)
                return False
            if amount > self._balance:
                logger.warning("Vault holds %d, cannot release %d", self._balance, amount)
                return False
            self._balance -= amount
            self.payouts[recipient] += amount
            return True

    @property
    def balance(self) -> int:
        with self._lock:
            return self._balance
