"""
Data Export / Import

Export writes the current ledger as a pretty-printed JSON document named
after the current date. The document has exactly the persisted shape, so
importing it back reproduces the same balances, goal and history.
"""

import datetime as dt
import json
from typing import Optional, Union

from personal_bank.logger import get_logger
from personal_bank.models import Ledger
from personal_bank.services.storage import (
    LedgerFormatError,
    dump_ledger_document,
    parse_ledger_document,
)


EXPORT_PREFIX = "mpb-data"
EXPORT_MIME_TYPE = "application/json"

logger = get_logger(__name__)


class ImportFormatError(LedgerFormatError):
    """An imported file is not a valid ledger export."""
    pass


def export_filename(today: Optional[dt.date] = None) -> str:
    """File name for an export made on `today`, e.g. mpb-data-2024-05-01.json."""
    today = today or dt.date.today()
    return f"{EXPORT_PREFIX}-{today.isoformat()}.json"


def export_ledger(ledger: Ledger) -> str:
    """Serialize a ledger as an indented JSON document."""
    return dump_ledger_document(ledger, indent=2)


def import_ledger(data: Union[str, bytes]) -> Ledger:
    """
    Parse an exported document back into a Ledger.

    Raises:
        ImportFormatError: If the data is not JSON or not a ledger.
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ImportFormatError("Export file is not UTF-8 text") from e

    try:
        document = json.loads(data)
    except json.JSONDecodeError as e:
        raise ImportFormatError(f"Export file is not valid JSON: {e.msg}") from e

    try:
        ledger = parse_ledger_document(document)
    except LedgerFormatError as e:
        raise ImportFormatError(str(e)) from e

    logger.info("ledger_imported", transactions=len(ledger.transactions))
    return ledger
