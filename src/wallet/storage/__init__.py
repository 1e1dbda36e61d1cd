# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

from wallet.storage.file import (
    export_dump,
    export_to_file,
    history_to_files,
    import_dump,
    import_from_file,
)
from wallet.storage.interface import LedgerStorage
from wallet.storage.memory import MemoryStorage

__all__ = [
    "LedgerStorage",
    "MemoryStorage",
    "export_dump",
    "import_dump",
    "export_to_file",
    "import_from_file",
    "history_to_files",
]
