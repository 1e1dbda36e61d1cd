# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field


class WalletConfig(BaseModel, frozen=True):
    """
    Configuration for a WalletService.

    All fields are optional. The defaults produce the standard dump layout.

    Attributes:
        field_separator: Separator between the fields of one record.
        record_separator: Separator between records in directory dumps.
        legacy_record_separator: Separator between records in the legacy
            single-file account dump written by ``export_to_file``.
        accounts_file: File name of the account dump inside a directory.
        payments_file: File name of the payment dump inside a directory.
        favorites_file: File name of the favorite dump inside a directory.
        history_prefix: Prefix of chunked payment history files
            (``payments1.dump``, ``payments2.dump``, ...).
        dump_suffix: Extension shared by every dump file.
        default_workers: Worker count used by aggregations when the caller
            does not pass one.
        strict_reject: When True, rejecting a payment that has already
            failed raises instead of refunding it a second time.

    Example::

        config = WalletConfig(default_workers=8, strict_reject=True)
        service = WalletService(config=config)
    """

    field_separator: Annotated[str, Field(min_length=1)] = ";"
    record_separator: Annotated[str, Field(min_length=1)] = "\n"
    legacy_record_separator: Annotated[str, Field(min_length=1, max_length=1)] = "|"
    accounts_file: str = "accounts.dump"
    payments_file: str = "payments.dump"
    favorites_file: str = "favorites.dump"
    history_prefix: str = "payments"
    dump_suffix: str = ".dump"
    default_workers: Annotated[int, Field(ge=1)] = 4
    strict_reject: bool = False
