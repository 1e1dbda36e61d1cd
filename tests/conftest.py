# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for wallet tests."""

from __future__ import annotations

import pytest

from wallet.service import WalletService
from wallet.types import Account, Favorite, Payment

DEFAULT_PHONE = "+992937452945"
DEFAULT_BALANCE = 10_000_00
DEFAULT_PAYMENT_AMOUNT = 1_000_00
DEFAULT_CATEGORY = "auto"


@pytest.fixture
def service() -> WalletService:
    """A freshly initialised WalletService with default config."""
    return WalletService()


@pytest.fixture
def funded_service(service: WalletService) -> WalletService:
    """
    A service holding one account funded with 10 000.00, one 'auto' payment
    of 1 000.00 and a favorite made from that payment.
    """
    account = service.register_account(DEFAULT_PHONE)
    service.deposit(account.id, DEFAULT_BALANCE)
    payment = service.pay(account.id, DEFAULT_PAYMENT_AMOUNT, DEFAULT_CATEGORY)
    service.favorite_payment(payment.id, "favorite")
    return service


@pytest.fixture
def account(funded_service: WalletService) -> Account:
    return funded_service.accounts()[0]


@pytest.fixture
def payment(funded_service: WalletService) -> Payment:
    return funded_service.payments()[0]


@pytest.fixture
def favorite(funded_service: WalletService) -> Favorite:
    return funded_service.favorites()[0]
