"""Tests for the wallet around the balance service."""

import threading

import pytest

from holdem_engine.errors import ConfigurationError, InsufficientFundsError
from holdem_engine.wallet import InMemoryBalanceService, Wallet


class TestWallet:
    def test_debit(self):
        wallet = Wallet(InMemoryBalanceService(1000))
        assert wallet.debit(300, reason="buy-in") == 700
        assert wallet.balance == 700

    def test_debit_insufficient(self):
        service = InMemoryBalanceService(100)
        wallet = Wallet(service)
        with pytest.raises(InsufficientFundsError):
            wallet.debit(101)
        assert service.get_balance() == 100

    def test_insufficient_funds_is_configuration_error(self):
        assert issubclass(InsufficientFundsError, ConfigurationError)

    def test_credit(self):
        wallet = Wallet(InMemoryBalanceService(0))
        assert wallet.credit(40) == 40

    def test_concurrent_updates_not_lost(self):
        """Read-then-write updates from many threads all land."""
        wallet = Wallet(InMemoryBalanceService(10000))

        def work():
            for _ in range(200):
                wallet.credit(3)
                wallet.debit(1)

        threads = [threading.Thread(target=work) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert wallet.balance == 10000 + 8 * 200 * 2
