# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations


class WalletError(Exception):
    """Base class for all wallet errors."""

    def __init__(self, message: str, code: str = "WALLET_ERROR") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class PhoneAlreadyRegisteredError(WalletError):
    """Raised when registering a phone number that already has an account."""

    def __init__(self, phone: str) -> None:
        super().__init__(
            f"Phone '{phone}' is already registered.",
            code="PHONE_ALREADY_REGISTERED",
        )
        self.phone = phone


class AmountMustBePositiveError(WalletError):
    """Raised when a deposit or payment amount is zero or negative."""

    def __init__(self, amount: int) -> None:
        super().__init__(
            f"Amount must be greater than zero, got {amount}.",
            code="AMOUNT_MUST_BE_POSITIVE",
        )
        self.amount = amount


class AccountNotFoundError(WalletError):
    """Raised when a referenced account does not exist."""

    def __init__(self, account_id: int) -> None:
        super().__init__(
            f"Account {account_id} does not exist.",
            code="ACCOUNT_NOT_FOUND",
        )
        self.account_id = account_id


class NotEnoughBalanceError(WalletError):
    """
    Raised when a payment would take the account balance below zero.

    Attributes:
        account_id: The account being debited.
        requested: The payment amount.
        available: The balance at the time of the request.
    """

    def __init__(self, account_id: int, requested: int, available: int) -> None:
        super().__init__(
            f"Account {account_id}: requested {requested} "
            f"but only {available} is available.",
            code="NOT_ENOUGH_BALANCE",
        )
        self.account_id = account_id
        self.requested = requested
        self.available = available


class PaymentNotFoundError(WalletError):
    """Raised when a referenced payment does not exist."""

    def __init__(self, payment_id: str) -> None:
        super().__init__(
            f"Payment '{payment_id}' does not exist.",
            code="PAYMENT_NOT_FOUND",
        )
        self.payment_id = payment_id


class FavoriteNotFoundError(WalletError):
    """Raised when a referenced favorite does not exist."""

    def __init__(self, favorite_id: str) -> None:
        super().__init__(
            f"Favorite '{favorite_id}' does not exist.",
            code="FAVORITE_NOT_FOUND",
        )
        self.favorite_id = favorite_id


class PaymentAlreadyRejectedError(WalletError):
    """Raised by a strict-mode reject of a payment that has already failed."""

    def __init__(self, payment_id: str) -> None:
        super().__init__(
            f"Payment '{payment_id}' has already been rejected.",
            code="PAYMENT_ALREADY_REJECTED",
        )
        self.payment_id = payment_id


class DumpFormatError(WalletError):
    """Raised when a dump line cannot be decoded into a record."""

    def __init__(self, line: str, expected_fields: int, detail: str | None = None) -> None:
        reason = detail or f"expected {expected_fields} fields"
        super().__init__(
            f"Malformed dump line {line!r}: {reason}.",
            code="DUMP_FORMAT_ERROR",
        )
        self.line = line
        self.expected_fields = expected_fields


class InvalidFieldError(WalletError):
    """
    Raised when a text field holds a character reserved by the dump format.

    Attributes:
        field: Name of the rejected field (``phone``, ``category``, ``name``).
        value: The rejected value.
        separator: The reserved character found in ``value``.
    """

    def __init__(self, field: str, value: str, separator: str) -> None:
        super().__init__(
            f"{field.capitalize()} {value!r} contains the reserved separator {separator!r}.",
            code="INVALID_FIELD",
        )
        self.field = field
        self.value = value
        self.separator = separator
