# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""
Tests for the dump codec and flat-file export/import.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

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
from wallet.errors import DumpFormatError, InvalidFieldError
from wallet.service import WalletService
from wallet.storage.memory import MemoryStorage
from wallet.types import Account, Favorite, Payment, PaymentStatus


def _seed(service: WalletService) -> None:
    for index, balance in enumerate((100, 101, 102)):
        account = service.register_account(f"+99293745294{5 + index}")
        service.deposit(account.id, balance)


def _lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


# ---------------------------------------------------------------------------
# TestCodec
# ---------------------------------------------------------------------------


class TestCodec:
    def test_account_line_round_trip(self) -> None:
        account = parse_accounts("1;+992937452945;0")[0]
        assert account == Account(id=1, phone="+992937452945", balance=0)
        assert format_account(account) == "1;+992937452945;0"

    def test_payment_line_layout(self) -> None:
        payment = Payment(
            id="p-1", account_id=3, amount=250, category="auto", status=PaymentStatus.FAIL
        )
        assert format_payment(payment) == "p-1;3;250;auto;FAIL"
        assert parse_payment("p-1;3;250;auto;FAIL") == payment

    def test_in_progress_status_literal(self) -> None:
        assert parse_payment("p;1;1;c;INPROGRESS").status == PaymentStatus.IN_PROGRESS
        assert parse_payment("p;1;1;c;OK").status == PaymentStatus.OK

    def test_favorite_line_layout(self) -> None:
        favorite = Favorite(id="f-1", account_id=2, name="rent", amount=5_000, category="home")
        assert format_favorite(favorite) == "f-1;2;rent;5000;home"
        assert parse_favorite("f-1;2;rent;5000;home") == favorite

    def test_malformed_numbers_decode_as_zero(self) -> None:
        assert parse_account("x;+1;abc") == Account(id=0, phone="+1", balance=0)

    def test_wrong_field_count_raises(self) -> None:
        with pytest.raises(DumpFormatError) as exc_info:
            parse_account("1;+992937452945")
        assert exc_info.value.expected_fields == 3

    def test_unknown_status_raises(self) -> None:
        with pytest.raises(DumpFormatError):
            parse_payment("p;1;1;c;DONE")

    def test_collection_uses_record_separator(self) -> None:
        accounts = [Account(id=1, phone="+1", balance=5), Account(id=2, phone="+2", balance=6)]
        assert format_accounts(accounts) == "1;+1;5\n2;+2;6\n"
        assert parse_accounts("1;+1;5|2;+2;6", record_separator="|") == accounts

    def test_blank_records_are_ignored(self) -> None:
        assert parse_accounts("\n1;+1;5\n\n") == [Account(id=1, phone="+1", balance=5)]


# ---------------------------------------------------------------------------
# TestExportImport
# ---------------------------------------------------------------------------


class TestExportImport:
    def test_round_trip_into_fresh_service(
        self, funded_service: WalletService, tmp_path: Path
    ) -> None:
        other = funded_service.register_account("+992900000000")
        funded_service.deposit(other.id, 42)
        funded_service.export_dump(tmp_path)

        restored = WalletService()
        restored.import_dump(tmp_path)

        assert restored.accounts() == funded_service.accounts()
        assert restored.payments() == funded_service.payments()
        assert restored.favorites() == funded_service.favorites()

    def test_export_writes_one_line_per_record(
        self, funded_service: WalletService, tmp_path: Path
    ) -> None:
        funded_service.export_dump(tmp_path)
        account = funded_service.accounts()[0]
        assert _lines(tmp_path / "accounts.dump") == [f"1;+992937452945;{account.balance}"]
        assert len(_lines(tmp_path / "payments.dump")) == 1
        assert len(_lines(tmp_path / "favorites.dump")) == 1

    def test_export_skips_empty_collections_and_creates_directory(
        self, service: WalletService, tmp_path: Path
    ) -> None:
        _seed(service)
        target = tmp_path / "nested" / "dump"

        written = service.export_dump(target)

        assert written == [target / "accounts.dump"]
        assert not (target / "payments.dump").exists()
        assert not (target / "favorites.dump").exists()

    def test_import_overwrites_existing_records_by_id(
        self, service: WalletService, tmp_path: Path
    ) -> None:
        (tmp_path / "accounts.dump").write_text("1;+992000000001;500\n", encoding="utf-8")
        service.register_account("+992000000001")

        service.import_dump(tmp_path)

        assert service.accounts() == [Account(id=1, phone="+992000000001", balance=500)]

    def test_import_appends_each_new_record_once(
        self, service: WalletService, tmp_path: Path
    ) -> None:
        service.register_account("+992000000001")
        service.register_account("+992000000002")
        (tmp_path / "accounts.dump").write_text("7;+992000000007;70\n", encoding="utf-8")

        service.import_dump(tmp_path)

        assert [account.id for account in service.accounts()] == [1, 2, 7]

    def test_import_skips_account_whose_phone_is_taken(
        self,
        service: WalletService,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        service.register_account("+1")
        (tmp_path / "accounts.dump").write_text("5;+1;70\n6;+6;60\n", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="wallet.storage"):
            service.import_dump(tmp_path)

        assert "duplicate_phone_imported" in caplog.text
        assert [(a.id, a.phone) for a in service.accounts()] == [(1, "+1"), (6, "+6")]

    def test_rejected_category_keeps_payments_round_trip_intact(
        self, service: WalletService, tmp_path: Path
    ) -> None:
        account = service.register_account("+1")
        service.deposit(account.id, 100)
        service.pay(account.id, 10, "auto")
        with pytest.raises(InvalidFieldError):
            service.pay(account.id, 10, "food;drinks")
        service.export_dump(tmp_path)

        restored = WalletService()
        restored.import_dump(tmp_path)

        assert restored.payments() == service.payments()
        assert len(restored.payments()) == 1

    def test_import_advances_account_ids(self, service: WalletService, tmp_path: Path) -> None:
        (tmp_path / "accounts.dump").write_text(
            "1;+1;0\n2;+2;0\n3;+3;0\n", encoding="utf-8"
        )
        service.import_dump(tmp_path)
        assert service.register_account("+4").id == 4

    def test_import_updates_payment_status(
        self, funded_service: WalletService, payment: Payment, tmp_path: Path
    ) -> None:
        funded_service.export_dump(tmp_path)
        funded_service.reject(payment.id)
        assert funded_service.find_payment_by_id(payment.id).status == PaymentStatus.FAIL

        funded_service.import_dump(tmp_path)

        assert funded_service.find_payment_by_id(payment.id).status == PaymentStatus.IN_PROGRESS
        assert len(funded_service.payments()) == 1

    def test_import_from_empty_directory_is_a_no_op(
        self, service: WalletService, tmp_path: Path
    ) -> None:
        service.import_dump(tmp_path)
        assert service.accounts() == []

    def test_malformed_file_is_logged_and_others_still_imported(
        self,
        service: WalletService,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        (tmp_path / "accounts.dump").write_text("1;+1;10\n", encoding="utf-8")
        (tmp_path / "payments.dump").write_text("garbage\n", encoding="utf-8")
        (tmp_path / "favorites.dump").write_text("f;1;rent;5;home\n", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="wallet.storage"):
            service.import_dump(tmp_path)

        assert "dump_import_skipped" in caplog.text
        assert len(service.accounts()) == 1
        assert service.payments() == []
        assert service.find_favorite_by_id("f").name == "rent"


# ---------------------------------------------------------------------------
# TestHistoryToFiles
# ---------------------------------------------------------------------------


class TestHistoryToFiles:
    @pytest.fixture
    def fifteen_payments(self, service: WalletService) -> list[Payment]:
        account = service.register_account("+10000000001")
        service.deposit(account.id, 15)
        for _ in range(15):
            service.pay(account.id, 1, "unit")
        return service.payments()

    def test_splits_into_numbered_files(
        self, service: WalletService, fifteen_payments: list[Payment], tmp_path: Path
    ) -> None:
        written = service.history_to_files(fifteen_payments, tmp_path, 4)

        assert [path.name for path in written] == [
            "payments1.dump",
            "payments2.dump",
            "payments3.dump",
            "payments4.dump",
        ]
        assert [len(_lines(path)) for path in written] == [4, 4, 4, 3]

    def test_files_keep_payment_order(
        self, service: WalletService, fifteen_payments: list[Payment], tmp_path: Path
    ) -> None:
        written = service.history_to_files(fifteen_payments, tmp_path, 4)
        ids = [line.split(";")[0] for path in written for line in _lines(path)]
        assert ids == [payment.id for payment in fifteen_payments]

    def test_list_that_fits_goes_to_single_file(
        self, service: WalletService, fifteen_payments: list[Payment], tmp_path: Path
    ) -> None:
        written = service.history_to_files(fifteen_payments, tmp_path, 15)
        assert written == [tmp_path / "payments.dump"]
        assert len(_lines(written[0])) == 15

    def test_empty_list_writes_nothing(self, service: WalletService, tmp_path: Path) -> None:
        assert service.history_to_files([], tmp_path, 4) == []
        assert list(tmp_path.iterdir()) == []

    def test_records_per_file_below_one_raises(
        self, service: WalletService, fifteen_payments: list[Payment], tmp_path: Path
    ) -> None:
        with pytest.raises(ValueError, match="records_per_file"):
            service.history_to_files(fifteen_payments, tmp_path, 0)


# ---------------------------------------------------------------------------
# TestLegacyFile
# ---------------------------------------------------------------------------


class TestLegacyFile:
    def test_export_joins_accounts_with_pipe(self, service: WalletService, tmp_path: Path) -> None:
        _seed(service)
        path = service.export_to_file(tmp_path / "data" / "accounts.txt")
        assert path.read_text(encoding="utf-8") == (
            "1;+992937452945;100|2;+992937452946;101|3;+992937452947;102"
        )

    def test_import_from_file_round_trip(self, service: WalletService, tmp_path: Path) -> None:
        _seed(service)
        path = service.export_to_file(tmp_path / "accounts.txt")

        restored = WalletService()
        inserted = restored.import_from_file(path)

        assert inserted == 3
        assert restored.accounts() == service.accounts()

    def test_import_from_missing_file_raises(self, service: WalletService, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            service.import_from_file(tmp_path / "missing.txt")


# ---------------------------------------------------------------------------
# TestMemoryStorage
# ---------------------------------------------------------------------------


class TestMemoryStorage:
    def test_save_overwrites_record_with_same_id(self) -> None:
        storage = MemoryStorage()
        storage.add_account(Account(id=1, phone="+1", balance=0))
        storage.save_account(Account(id=1, phone="+1", balance=25))
        assert storage.list_accounts() == [Account(id=1, phone="+1", balance=25)]

    def test_save_of_unknown_account_raises_key_error(self) -> None:
        storage = MemoryStorage()
        with pytest.raises(KeyError):
            storage.save_account(Account(id=1, phone="+1", balance=0))
        assert storage.list_accounts() == []

    def test_save_of_unknown_payment_or_favorite_raises_key_error(self) -> None:
        storage = MemoryStorage()
        with pytest.raises(KeyError):
            storage.save_payment(Payment(id="p", account_id=1, amount=1, category="c"))
        with pytest.raises(KeyError):
            storage.save_favorite(
                Favorite(id="f", account_id=1, name="n", amount=1, category="c")
            )
        assert storage.list_payments() == []
        assert storage.list_favorites() == []
