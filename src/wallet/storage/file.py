# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Flat-file dumps of a ledger store.

Directory dumps hold up to three files (``accounts.dump``, ``payments.dump``,
``favorites.dump``), one record per line. Export overwrites them in full;
import merges them back by ID, updating records that already exist and
appending the rest. The legacy single-file format holds accounts only,
joined by ``|``.

All I/O is synchronous. Export errors propagate; import errors are logged per
file and the remaining files are still read.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, TypeVar

from wallet.codec import (
    format_account,
    format_favorite,
    format_payment,
    format_records,
    parse_account,
    parse_favorite,
    parse_payment,
    parse_records,
)
from wallet.config import WalletConfig
from wallet.errors import WalletError
from wallet.storage.interface import LedgerStorage
from wallet.types import Account, Favorite, Payment

logger = logging.getLogger("wallet.storage")

R = TypeVar("R")


def _write(path: Path, text: str) -> None:
    path.write_text(text, encoding="utf-8", newline="")


# ─── Directory dumps ──────────────────────────────────────────────────────────


def export_dump(
    storage: LedgerStorage,
    directory: str | Path,
    config: WalletConfig | None = None,
) -> list[Path]:
    """
    Write the store's collections into ``directory``.

    The directory is created if it does not exist. A collection that is empty
    is skipped and its file left untouched. Returns the paths written.
    """
    config = config or WalletConfig()
    target = Path(directory)
    target.mkdir(parents=True, exist_ok=True)

    collections: list[tuple[str, list, Callable]] = [
        (config.accounts_file, storage.list_accounts(), format_account),
        (config.payments_file, storage.list_payments(), format_payment),
        (config.favorites_file, storage.list_favorites(), format_favorite),
    ]

    written: list[Path] = []
    for file_name, records, formatter in collections:
        if not records:
            continue
        path = target / file_name
        _write(
            path,
            format_records(
                records,
                formatter,
                config.record_separator,
                config.field_separator,
            ),
        )
        written.append(path)

    logger.info(
        "dump_exported",
        extra={"directory": str(target), "files": [path.name for path in written]},
    )
    return written


def _read_dump(
    path: Path,
    parser: Callable[[str, str], R],
    config: WalletConfig,
) -> list[R] | None:
    if not path.exists():
        return None
    try:
        text = path.read_text(encoding="utf-8")
        return parse_records(text, parser, config.record_separator, config.field_separator)
    except (OSError, UnicodeDecodeError, WalletError) as exc:
        logger.warning("dump_import_skipped", extra={"path": str(path), "error": str(exc)})
        return None


def _merge_accounts(storage: LedgerStorage, accounts: list[Account]) -> int:
    known_ids = {account.id for account in storage.list_accounts()}
    inserted = 0
    for account in accounts:
        # Phones stay unique: a record whose phone belongs to another ID is dropped.
        owner = storage.get_account_by_phone(account.phone)
        if owner is not None and owner.id != account.id:
            logger.warning(
                "duplicate_phone_imported",
                extra={"account_id": account.id, "owner_id": owner.id},
            )
            continue
        if account.id in known_ids:
            storage.save_account(account)
            continue
        storage.add_account(account)
        storage.advance_account_id(account.id)
        known_ids.add(account.id)
        inserted += 1
    return inserted


def _merge_payments(storage: LedgerStorage, payments: list[Payment]) -> int:
    known_ids = {payment.id for payment in storage.list_payments()}
    inserted = 0
    for payment in payments:
        if payment.id in known_ids:
            storage.save_payment(payment)
            continue
        storage.add_payment(payment)
        known_ids.add(payment.id)
        inserted += 1
    return inserted


def _merge_favorites(storage: LedgerStorage, favorites: list[Favorite]) -> int:
    known_ids = {favorite.id for favorite in storage.list_favorites()}
    inserted = 0
    for favorite in favorites:
        if favorite.id in known_ids:
            storage.save_favorite(favorite)
            continue
        storage.add_favorite(favorite)
        known_ids.add(favorite.id)
        inserted += 1
    return inserted


def import_dump(
    storage: LedgerStorage,
    directory: str | Path,
    config: WalletConfig | None = None,
) -> None:
    """
    Merge the dump files found in ``directory`` into the store.

    Records whose ID is already present overwrite the stored record; new
    records are appended and, for accounts, push the ID counter forward.
    Accounts whose phone is held by a different account ID are skipped with
    a warning.
    Missing files are skipped silently. A file that cannot be read or
    decoded is logged and skipped without aborting the other files.
    """
    config = config or WalletConfig()
    source = Path(directory)

    accounts = _read_dump(source / config.accounts_file, parse_account, config)
    if accounts is not None:
        inserted = _merge_accounts(storage, accounts)
        logger.info(
            "accounts_imported",
            extra={"read": len(accounts), "inserted": inserted},
        )

    payments = _read_dump(source / config.payments_file, parse_payment, config)
    if payments is not None:
        inserted = _merge_payments(storage, payments)
        logger.info(
            "payments_imported",
            extra={"read": len(payments), "inserted": inserted},
        )

    favorites = _read_dump(source / config.favorites_file, parse_favorite, config)
    if favorites is not None:
        inserted = _merge_favorites(storage, favorites)
        logger.info(
            "favorites_imported",
            extra={"read": len(favorites), "inserted": inserted},
        )


# ─── Payment history ──────────────────────────────────────────────────────────


def history_to_files(
    payments: list[Payment],
    directory: str | Path,
    records_per_file: int,
    config: WalletConfig | None = None,
) -> list[Path]:
    """
    Write ``payments`` into ``directory`` at most ``records_per_file`` lines
    per file.

    A list that fits into one file goes to ``payments.dump``; a longer one is
    split across ``payments1.dump``, ``payments2.dump``, ... in order. An empty
    list writes nothing.

    Raises:
        ValueError: If ``records_per_file`` is less than 1.
    """
    if records_per_file < 1:
        raise ValueError(f"records_per_file must be >= 1; got {records_per_file}.")

    config = config or WalletConfig()
    if not payments:
        return []

    target = Path(directory)
    target.mkdir(parents=True, exist_ok=True)

    if len(payments) <= records_per_file:
        chunks = [(config.history_prefix + config.dump_suffix, payments)]
    else:
        chunks = [
            (
                f"{config.history_prefix}{number}{config.dump_suffix}",
                payments[start : start + records_per_file],
            )
            for number, start in enumerate(range(0, len(payments), records_per_file), start=1)
        ]

    written: list[Path] = []
    for file_name, chunk in chunks:
        path = target / file_name
        _write(
            path,
            format_records(chunk, format_payment, config.record_separator, config.field_separator),
        )
        written.append(path)

    logger.info(
        "history_exported",
        extra={"directory": str(target), "payments": len(payments), "files": len(written)},
    )
    return written


# ─── Legacy single-file account dump ──────────────────────────────────────────


def export_to_file(
    storage: LedgerStorage,
    path: str | Path,
    config: WalletConfig | None = None,
) -> Path:
    """
    Write every account into one file, joined by the legacy separator.

    The parent directory is created if needed. The file is overwritten even
    when there are no accounts.
    """
    config = config or WalletConfig()
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    _write(
        target,
        format_records(
            storage.list_accounts(),
            format_account,
            config.legacy_record_separator,
            config.field_separator,
            terminate=False,
        ),
    )
    return target


def import_from_file(
    storage: LedgerStorage,
    path: str | Path,
    config: WalletConfig | None = None,
) -> int:
    """
    Merge accounts from a legacy single-file dump into the store.

    Returns the number of accounts newly inserted.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        DumpFormatError: If a record has the wrong number of fields.
    """
    config = config or WalletConfig()
    text = Path(path).read_text(encoding="utf-8")
    accounts = parse_records(
        text,
        parse_account,
        config.legacy_record_separator,
        config.field_separator,
    )
    return _merge_accounts(storage, accounts)
