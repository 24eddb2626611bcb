"""
Reads recipients from a CSV file with ``address`` and ``amount`` columns.
"""

import csv
import io
import logging
from typing import Dict, List, Union

from .errors import CsvFormatError

logger = logging.getLogger(__name__)


def parse_recipients_csv(content: Union[bytes, str]) -> List[Dict[str, str]]:
    """Return one ``{address, amount}`` dict per row that has both columns filled.

    Amounts are left as strings; validate_recipients parses them.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise CsvFormatError(f"CSV file is not valid UTF-8: {e}") from e

    recipients = []
    try:
        reader = csv.DictReader(io.StringIO(content))
        for row_num, row in enumerate(reader, start=2):  # Start at 2 to account for header
            address = (row.get("address") or "").strip()
            amount = (row.get("amount") or "").strip()
            if not address or not amount:
                logger.debug(f"Skipping row {row_num}: missing address or amount")
                continue
            recipients.append({"address": address, "amount": amount})
    except csv.Error as e:
        raise CsvFormatError(f"Malformed CSV: {e}") from e

    logger.info(f"Loaded {len(recipients)} recipients from CSV")
    return recipients


def read_recipients_csv(path: str) -> List[Dict[str, str]]:
    with open(path, 'rb') as f:
        return parse_recipients_csv(f.read())
