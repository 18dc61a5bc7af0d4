"""Balance service seam between the table and the player's account."""

import logging
import threading
from typing import Protocol

from holdem_engine.errors import InsufficientFundsError

logger = logging.getLogger("holdem.wallet")


class BalanceService(Protocol):
    """Account balance owned outside the engine."""

    def get_balance(self) -> int:
        ...

    def set_balance(self, new_balance: int) -> None:
        ...


class InMemoryBalanceService:
    """Play-money balance kept in process memory."""

    def __init__(self, balance: int = 0):
        self._balance = balance

    def get_balance(self) -> int:
        return self._balance

    def set_balance(self, new_balance: int) -> None:
        self._balance = new_balance


class Wallet:
    """Serializes debits and credits against a balance service.

    Every mutation reads the current balance first and writes the new one
    while holding the lock, so a buy-in and a payout never interleave.
    """

    def __init__(self, service: BalanceService):
        self.service = service
        self._lock = threading.Lock()

    @property
    def balance(self) -> int:
        return self.service.get_balance()

    def debit(self, amount: int, reason: str = "") -> int:
        """Take ``amount`` from the balance.

        Returns:
            The new balance.

        Raises:
            InsufficientFundsError: If the balance cannot cover ``amount``.
        """
        with self._lock:
            old_balance = self.service.get_balance()
            if old_balance < amount:
                raise InsufficientFundsError(
                    f"Balance {old_balance} cannot cover {amount}"
                )
            new_balance = old_balance - amount
            self.service.set_balance(new_balance)
        logger.info(f"Debited {amount} ({reason}): {old_balance} -> {new_balance}")
        return new_balance

    def credit(self, amount: int, reason: str = "") -> int:
        """Add ``amount`` to the balance and return the new balance."""
        with self._lock:
            old_balance = self.service.get_balance()
            new_balance = old_balance + amount
            self.service.set_balance(new_balance)
        logger.info(f"Credited {amount} ({reason}): {old_balance} -> {new_balance}")
        return new_balance
