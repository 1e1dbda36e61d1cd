# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Volatile in-memory ledger store.

Records are held in plain lists in insertion order and looked up by linear
scan, which is fine for a personal ledger. Data is lost when the process
exits unless it is dumped with ``wallet.storage.file``.
"""

from __future__ import annotations

from wallet.storage.interface import LedgerStorage
from wallet.types import Account, Favorite, Payment


class MemoryStorage(LedgerStorage):
    """In-process, list-backed LedgerStorage implementation."""

    def __init__(self) -> None:
        self._last_account_id = 0
        self._accounts: list[Account] = []
        self._payments: list[Payment] = []
        self._favorites: list[Favorite] = []

    # ─── Accounts ─────────────────────────────────────────────────────────────

    def next_account_id(self) -> int:
        self._last_account_id += 1
        return self._last_account_id

    def advance_account_id(self, account_id: int) -> None:
        self._last_account_id = max(self._last_account_id, account_id)

    def add_account(self, account: Account) -> None:
        self._accounts.append(account)

    def get_account(self, account_id: int) -> Account | None:
        for account in self._accounts:
            if account.id == account_id:
                return account
        return None

    def get_account_by_phone(self, phone: str) -> Account | None:
        for account in self._accounts:
            if account.phone == phone:
                return account
        return None

    def save_account(self, account: Account) -> None:
        for index, stored in enumerate(self._accounts):
            if stored.id == account.id:
                self._accounts[index] = account
                return
        raise KeyError(f"No account with id {account.id!r} to overwrite.")

    def list_accounts(self) -> list[Account]:
        return [account.model_copy(deep=True) for account in self._accounts]

    # ─── Payments ─────────────────────────────────────────────────────────────

    def add_payment(self, payment: Payment) -> None:
        self._payments.append(payment)

    def get_payment(self, payment_id: str) -> Payment | None:
        for payment in self._payments:
            if payment.id == payment_id:
                return payment
        return None

    def save_payment(self, payment: Payment) -> None:
        for index, stored in enumerate(self._payments):
            if stored.id == payment.id:
                self._payments[index] = payment
                return
        raise KeyError(f"No payment with id {payment.id!r} to overwrite.")

    def list_payments(self) -> list[Payment]:
        return [payment.model_copy(deep=True) for payment in self._payments]

    # ─── Favorites ────────────────────────────────────────────────────────────

    def add_favorite(self, favorite: Favorite) -> None:
        self._favorites.append(favorite)

    def get_favorite(self, favorite_id: str) -> Favorite | None:
        for favorite in self._favorites:
            if favorite.id == favorite_id:
                return favorite
        return None

    def save_favorite(self, favorite: Favorite) -> None:
        for index, stored in enumerate(self._favorites):
            if stored.id == favorite.id:
                self._favorites[index] = favorite
                return
        raise KeyError(f"No favorite with id {favorite.id!r} to overwrite.")

    def list_favorites(self) -> list[Favorite]:
        return [favorite.model_copy(deep=True) for favorite in self._favorites]
