# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

from abc import ABC, abstractmethod

from wallet.types import Account, Favorite, Payment


class LedgerStorage(ABC):
    """
    Contract for the ledger store that owns accounts, payments and favorites.

    Getters return the stored record itself so that the service can mutate it
    in place; list methods return deep copies. The store carries no locking:
    callers serialise mutating calls.
    """

    # ─── Accounts ─────────────────────────────────────────────────────────────

    @abstractmethod
    def next_account_id(self) -> int:
        """Allocate the next sequential account ID, starting at 1."""
        ...

    @abstractmethod
    def advance_account_id(self, account_id: int) -> None:
        """Make sure future allocations are greater than ``account_id``."""
        ...

    @abstractmethod
    def add_account(self, account: Account) -> None:
        ...

    @abstractmethod
    def get_account(self, account_id: int) -> Account | None:
        ...

    @abstractmethod
    def get_account_by_phone(self, phone: str) -> Account | None:
        ...

    @abstractmethod
    def save_account(self, account: Account) -> None:
        """
        Overwrite the stored account with the same ID.

        Raises KeyError if no such account is stored; use ``add_account`` for
        new records.
        """
        ...

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        ...

    # ─── Payments ─────────────────────────────────────────────────────────────

    @abstractmethod
    def add_payment(self, payment: Payment) -> None:
        ...

    @abstractmethod
    def get_payment(self, payment_id: str) -> Payment | None:
        ...

    @abstractmethod
    def save_payment(self, payment: Payment) -> None:
        """Overwrite the stored payment with the same ID. Raises KeyError on a miss."""
        ...

    @abstractmethod
    def list_payments(self) -> list[Payment]:
        ...

    # ─── Favorites ────────────────────────────────────────────────────────────

    @abstractmethod
    def add_favorite(self, favorite: Favorite) -> None:
        ...

    @abstractmethod
    def get_favorite(self, favorite_id: str) -> Favorite | None:
        ...

    @abstractmethod
    def save_favorite(self, favorite: Favorite) -> None:
        """Overwrite the stored favorite with the same ID. Raises KeyError on a miss."""
        ...

    @abstractmethod
    def list_favorites(self) -> list[Favorite]:
        ...
