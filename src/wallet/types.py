# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from enum import Enum
from typing import Callable

from pydantic import BaseModel

# Money is an integer count of minor currency units (cents).
Money = int


class PaymentStatus(str, Enum):
    """
    Lifecycle state of a payment.

    The values are the literals written to dump files.
    """

    OK = "OK"
    FAIL = "FAIL"
    IN_PROGRESS = "INPROGRESS"


# ─── Records ──────────────────────────────────────────────────────────────────


class Account(BaseModel):
    """
    A registered wallet account.

    Attributes:
        id: Sequential identifier, allocated from 1 upwards.
        phone: Phone number, unique across all accounts.
        balance: Current balance in cents. Never negative.
    """

    id: int
    phone: str
    balance: Money = 0


class Payment(BaseModel):
    """A payment debited from an account."""

    id: str
    account_id: int
    amount: Money
    category: str
    status: PaymentStatus = PaymentStatus.IN_PROGRESS


class Favorite(BaseModel):
    """A named payment template, snapshotted from an existing payment."""

    id: str
    account_id: int
    name: str
    amount: Money
    category: str


class Progress(BaseModel):
    """
    One progress message emitted while summing payments.

    Attributes:
        part: Index of the chunk that processed the payment.
        result: Amount contributed by that single payment.
    """

    part: int
    result: Money


PaymentPredicate = Callable[[Payment], bool]
