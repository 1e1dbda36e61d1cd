# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from pathlib import Path
from uuid import uuid4

from wallet import aggregation
from wallet.config import WalletConfig
from wallet.errors import (
    AccountNotFoundError,
    AmountMustBePositiveError,
    FavoriteNotFoundError,
    InvalidFieldError,
    NotEnoughBalanceError,
    PaymentAlreadyRejectedError,
    PaymentNotFoundError,
    PhoneAlreadyRegisteredError,
)
from wallet.storage import file as dump_files
from wallet.storage.interface import LedgerStorage
from wallet.storage.memory import MemoryStorage
from wallet.types import (
    Account,
    Favorite,
    Money,
    Payment,
    PaymentPredicate,
    PaymentStatus,
    Progress,
)

logger = logging.getLogger("wallet.service")


class WalletService:
    """
    In-memory ledger of accounts, payments and favorite payments.

    Design contract
    ---------------
    - Balances never go negative. ``pay()`` refuses any amount above the
      current balance.
    - Every payment and favorite references an existing account.
    - Records are never deleted. ``reject()`` marks a payment as failed and
      refunds it; ``repeat()`` and ``pay_from_favorite()`` create new payments.
    - Returned records are copies. Mutate the ledger only through this class.
    - The service is not thread-safe. Serialise mutating calls.

    Usage
    -----
    ::

        service = WalletService()
        account = service.register_account("+992937452945")
        service.deposit(account.id, 10_000_00)

        payment = service.pay(account.id, 1_000_00, "auto")
        favorite = service.favorite_payment(payment.id, "car loan")
        service.pay_from_favorite(favorite.id)
    """

    def __init__(
        self,
        config: WalletConfig | None = None,
        storage: LedgerStorage | None = None,
    ) -> None:
        self._config = config or WalletConfig()
        self._storage: LedgerStorage = storage if storage is not None else MemoryStorage()

    @property
    def config(self) -> WalletConfig:
        return self._config

    # ─── Accounts ─────────────────────────────────────────────────────────────

    def register_account(self, phone: str) -> Account:
        """
        Create an account with a zero balance for ``phone``.

        Raises PhoneAlreadyRegisteredError if the phone already has an account,
        InvalidFieldError if it contains a dump separator.
        """
        self._check_text("phone", phone, self._config.legacy_record_separator)
        if self._storage.get_account_by_phone(phone) is not None:
            raise PhoneAlreadyRegisteredError(phone)

        account = Account(id=self._storage.next_account_id(), phone=phone, balance=0)
        self._storage.add_account(account)

        logger.info("account_registered", extra={"account_id": account.id})
        return account.model_copy(deep=True)

    def deposit(self, account_id: int, amount: Money) -> None:
        """Credit ``amount`` to the account. No payment record is created."""
        if amount <= 0:
            raise AmountMustBePositiveError(amount)

        account = self._require_account(account_id)
        account.balance += amount
        self._storage.save_account(account)

    # ─── Payments ─────────────────────────────────────────────────────────────

    def pay(self, account_id: int, amount: Money, category: str) -> Payment:
        """
        Debit ``amount`` from the account and record an in-progress payment.

        Raises:
            AmountMustBePositiveError: If ``amount`` is zero or negative.
            AccountNotFoundError: If the account does not exist.
            NotEnoughBalanceError: If the balance is below ``amount``.
            InvalidFieldError: If ``category`` contains a dump separator.
        """
        self._check_text("category", category)
        if amount <= 0:
            raise AmountMustBePositiveError(amount)

        account = self._require_account(account_id)
        if account.balance < amount:
            raise NotEnoughBalanceError(account_id, amount, account.balance)

        account.balance -= amount
        self._storage.save_account(account)

        payment = Payment(
            id=str(uuid4()),
            account_id=account_id,
            amount=amount,
            category=category,
            status=PaymentStatus.IN_PROGRESS,
        )
        self._storage.add_payment(payment)

        logger.debug(
            "payment_created",
            extra={"payment_id": payment.id, "account_id": account_id, "amount": amount},
        )
        return payment.model_copy(deep=True)

    def reject(self, payment_id: str) -> None:
        """
        Mark a payment as failed and refund its amount to the account.

        Rejecting an already failed payment refunds it again unless the
        service runs with ``strict_reject``, in which case it raises
        PaymentAlreadyRejectedError.
        """
        payment = self._require_payment(payment_id)
        account = self._require_account(payment.account_id)

        if payment.status == PaymentStatus.FAIL:
            if self._config.strict_reject:
                raise PaymentAlreadyRejectedError(payment_id)
            logger.warning("payment_rejected_twice", extra={"payment_id": payment_id})

        payment.status = PaymentStatus.FAIL
        account.balance += payment.amount
        self._storage.save_payment(payment)
        self._storage.save_account(account)

        logger.debug("payment_rejected", extra={"payment_id": payment_id})

    def repeat(self, payment_id: str) -> Payment:
        """Pay again with the account, amount and category of an earlier payment."""
        payment = self._require_payment(payment_id)
        return self.pay(payment.account_id, payment.amount, payment.category)

    # ─── Favorites ────────────────────────────────────────────────────────────

    def favorite_payment(self, payment_id: str, name: str) -> Favorite:
        """Save the account, amount and category of a payment under ``name``."""
        self._check_text("name", name)
        payment = self._require_payment(payment_id)

        favorite = Favorite(
            id=str(uuid4()),
            account_id=payment.account_id,
            name=name,
            amount=payment.amount,
            category=payment.category,
        )
        self._storage.add_favorite(favorite)
        return favorite.model_copy(deep=True)

    def pay_from_favorite(self, favorite_id: str) -> Payment:
        favorite = self._require_favorite(favorite_id)
        return self.pay(favorite.account_id, favorite.amount, favorite.category)

    # ─── Lookups ──────────────────────────────────────────────────────────────

    def find_account_by_id(self, account_id: int) -> Account:
        return self._require_account(account_id).model_copy(deep=True)

    def find_payment_by_id(self, payment_id: str) -> Payment:
        return self._require_payment(payment_id).model_copy(deep=True)

    def find_favorite_by_id(self, favorite_id: str) -> Favorite:
        return self._require_favorite(favorite_id).model_copy(deep=True)

    def accounts(self) -> list[Account]:
        return self._storage.list_accounts()

    def payments(self) -> list[Payment]:
        return self._storage.list_payments()

    def favorites(self) -> list[Favorite]:
        return self._storage.list_favorites()

    # ─── Aggregation ──────────────────────────────────────────────────────────

    def sum_payments(self, parts: int | None = None) -> Money:
        """Total amount of all payments, summed in parallel chunks."""
        return aggregation.sum_payments(self._storage.list_payments(), self._parts(parts))

    def filter_payments(self, account_id: int, parts: int | None = None) -> list[Payment]:
        """Return the payments of ``account_id``, filtered in parallel chunks."""
        return aggregation.filter_payments(
            self._storage.list_payments(), account_id, self._parts(parts)
        )

    def filter_payments_by_fn(
        self,
        predicate: PaymentPredicate,
        parts: int | None = None,
    ) -> list[Payment]:
        return aggregation.filter_payments_by_fn(
            self._storage.list_payments(), predicate, self._parts(parts)
        )

    def sum_payments_with_progress(self, parts: int | None = None) -> AsyncIterator[Progress]:
        """Stream one Progress message per payment; see ``aggregation``."""
        return aggregation.sum_payments_with_progress(
            self._storage.list_payments(), self._parts(parts)
        )

    # ─── Persistence ──────────────────────────────────────────────────────────

    def export_dump(self, directory: str | Path) -> list[Path]:
        return dump_files.export_dump(self._storage, directory, self._config)

    def import_dump(self, directory: str | Path) -> None:
        dump_files.import_dump(self._storage, directory, self._config)

    def export_to_file(self, path: str | Path) -> Path:
        return dump_files.export_to_file(self._storage, path, self._config)

    def import_from_file(self, path: str | Path) -> int:
        return dump_files.import_from_file(self._storage, path, self._config)

    def history_to_files(
        self,
        payments: list[Payment],
        directory: str | Path,
        records_per_file: int,
    ) -> list[Path]:
        return dump_files.history_to_files(payments, directory, records_per_file, self._config)

    # ─── Private helpers ──────────────────────────────────────────────────────

    def _check_text(self, field: str, value: str, *extra_separators: str) -> None:
        # Dump lines are split on these; "\r" is folded into "\n" when read back.
        separators = (
            self._config.field_separator,
            self._config.record_separator,
            "\r",
            *extra_separators,
        )
        for separator in separators:
            if separator in value:
                raise InvalidFieldError(field, value, separator)

    def _parts(self, parts: int | None) -> int:
        return self._config.default_workers if parts is None else parts

    def _require_account(self, account_id: int) -> Account:
        account = self._storage.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def _require_payment(self, payment_id: str) -> Payment:
        payment = self._storage.get_payment(payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        return payment

    def _require_favorite(self, favorite_id: str) -> Favorite:
        favorite = self._storage.get_favorite(favorite_id)
        if favorite is None:
            raise FavoriteNotFoundError(favorite_id)
        return favorite
