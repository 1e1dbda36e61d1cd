# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""
wallet — in-memory ledger of accounts, payments and favorite payments.

Quick start::

    from wallet import WalletService

    service = WalletService()
    account = service.register_account("+992937452945")
    service.deposit(account.id, 10_000_00)
    payment = service.pay(account.id, 1_000_00, "auto")

    service.export_dump("data")        # accounts.dump, payments.dump
    restored = WalletService()
    restored.import_dump("data")
"""
from __future__ import annotations

from wallet.aggregation import (
    filter_payments,
    filter_payments_by_fn,
    partition,
    sum_payments,
    sum_payments_with_progress,
)
from wallet.codec import (
    format_account,
    format_accounts,
    format_favorite,
    format_payment,
    parse_account,
    parse_accounts,
    parse_favorite,
    parse_payment,
)
from wallet.config import WalletConfig
from wallet.errors import (
    AccountNotFoundError,
    AmountMustBePositiveError,
    DumpFormatError,
    FavoriteNotFoundError,
    InvalidFieldError,
    NotEnoughBalanceError,
    PaymentAlreadyRejectedError,
    PaymentNotFoundError,
    PhoneAlreadyRegisteredError,
    WalletError,
)
from wallet.service import WalletService
from wallet.storage import LedgerStorage, MemoryStorage
from wallet.types import (
    Account,
    Favorite,
    Money,
    Payment,
    PaymentPredicate,
    PaymentStatus,
    Progress,
)

__all__ = [
    # Core class
    "WalletService",
    "WalletConfig",
    # Types
    "Money",
    "Account",
    "Payment",
    "PaymentStatus",
    "Favorite",
    "Progress",
    "PaymentPredicate",
    # Errors
    "WalletError",
    "PhoneAlreadyRegisteredError",
    "AmountMustBePositiveError",
    "AccountNotFoundError",
    "NotEnoughBalanceError",
    "PaymentNotFoundError",
    "FavoriteNotFoundError",
    "PaymentAlreadyRejectedError",
    "DumpFormatError",
    "InvalidFieldError",
    # Storage
    "LedgerStorage",
    "MemoryStorage",
    # Aggregation
    "partition",
    "sum_payments",
    "filter_payments",
    "filter_payments_by_fn",
    "sum_payments_with_progress",
    # Codec
    "format_account",
    "parse_account",
    "format_accounts",
    "parse_accounts",
    "format_payment",
    "parse_payment",
    "format_favorite",
    "parse_favorite",
]
