"""
Append-only record of transfer outcomes.

Each outcome is written as one JSON line as soon as it is known, so that after
a crash an operator can see which recipients were already paid. The journal is
never read back by the service: a resubmitted airdrop still pays everyone.
"""

import json
import logging
import os
import threading
import time
from typing import Optional

from .models import AirdropMethod, TransferOutcome

logger = logging.getLogger(__name__)


class TransferJournal:
    """Appends transfer outcomes to a JSON-lines file."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)

    def record(
        self,
        outcome: TransferOutcome,
        method: AirdropMethod,
        aggregate_tx_ref: Optional[str] = None,
    ) -> None:
        entry = {
            "timestamp": int(time.time()),
            "method": method.value,
            **outcome.to_dict(),
        }
        if aggregate_tx_ref is not None:
            entry["aggregate_tx_ref"] = aggregate_tx_ref

        try:
            with self._lock, open(self.path, "a") as f:
                f.write(json.dumps(entry) + "\n")
        except OSError as e:
            # The transfer already happened; losing the journal line must not turn it into a failure.
            logger.error(f"Failed to write journal entry for {outcome.address}: {e}")
