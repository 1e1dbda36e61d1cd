# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Line codec for dump files.

Each record is one line of separator-joined fields:

    account   id;phone;balance
    payment   id;account_id;amount;category;status
    favorite  id;account_id;name;amount;category

Collections are records joined by a record separator (a newline for
directory dumps, ``|`` for the legacy single-file account dump). Numeric
fields that fail to parse decode as 0; a wrong field count or an unknown
status literal raises DumpFormatError.
"""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

from wallet.errors import DumpFormatError
from wallet.types import Account, Favorite, Payment, PaymentStatus

R = TypeVar("R")

ACCOUNT_FIELDS = 3
PAYMENT_FIELDS = 5
FAVORITE_FIELDS = 5


def _to_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def _split(line: str, separator: str, expected_fields: int) -> list[str]:
    fields = line.split(separator)
    if len(fields) != expected_fields:
        raise DumpFormatError(line, expected_fields)
    return fields


# ─── Accounts ─────────────────────────────────────────────────────────────────


def format_account(account: Account, separator: str = ";") -> str:
    return separator.join((str(account.id), account.phone, str(account.balance)))


def parse_account(line: str, separator: str = ";") -> Account:
    account_id, phone, balance = _split(line, separator, ACCOUNT_FIELDS)
    return Account(id=_to_int(account_id), phone=phone, balance=_to_int(balance))


# ─── Payments ─────────────────────────────────────────────────────────────────


def format_payment(payment: Payment, separator: str = ";") -> str:
    return separator.join(
        (
            payment.id,
            str(payment.account_id),
            str(payment.amount),
            payment.category,
            payment.status.value,
        )
    )


def parse_payment(line: str, separator: str = ";") -> Payment:
    payment_id, account_id, amount, category, status = _split(line, separator, PAYMENT_FIELDS)
    try:
        payment_status = PaymentStatus(status)
    except ValueError:
        raise DumpFormatError(line, PAYMENT_FIELDS, f"unknown status {status!r}") from None
    return Payment(
        id=payment_id,
        account_id=_to_int(account_id),
        amount=_to_int(amount),
        category=category,
        status=payment_status,
    )


# ─── Favorites ────────────────────────────────────────────────────────────────


def format_favorite(favorite: Favorite, separator: str = ";") -> str:
    return separator.join(
        (
            favorite.id,
            str(favorite.account_id),
            favorite.name,
            str(favorite.amount),
            favorite.category,
        )
    )


def parse_favorite(line: str, separator: str = ";") -> Favorite:
    favorite_id, account_id, name, amount, category = _split(line, separator, FAVORITE_FIELDS)
    return Favorite(
        id=favorite_id,
        account_id=_to_int(account_id),
        name=name,
        amount=_to_int(amount),
        category=category,
    )


# ─── Collections ──────────────────────────────────────────────────────────────


def format_records(
    records: Iterable[R],
    formatter: Callable[[R, str], str],
    record_separator: str = "\n",
    field_separator: str = ";",
    terminate: bool = True,
) -> str:
    """
    Join formatted records with ``record_separator``.

    With ``terminate`` every record, the last included, is followed by the
    separator (one line per record). Without it the separator only sits
    between records, as in the legacy ``|`` format.
    """
    lines = [formatter(record, field_separator) for record in records]
    if not lines:
        return ""
    text = record_separator.join(lines)
    return text + record_separator if terminate else text


def parse_records(
    text: str,
    parser: Callable[[str, str], R],
    record_separator: str = "\n",
    field_separator: str = ";",
) -> list[R]:
    """Split ``text`` on ``record_separator`` and decode every non-blank chunk."""
    records: list[R] = []
    for chunk in text.split(record_separator):
        stripped = chunk.strip()
        if not stripped:
            continue
        records.append(parser(stripped, field_separator))
    return records


def format_accounts(accounts: Iterable[Account], record_separator: str = "\n") -> str:
    return format_records(accounts, format_account, record_separator)


def parse_accounts(text: str, record_separator: str = "\n") -> list[Account]:
    return parse_records(text, parse_account, record_separator)
