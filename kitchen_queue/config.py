"""Runtime configuration defaults for the order queue and its data file."""

from __future__ import annotations

import os
from decimal import Decimal

_DATA_PATH_ENV = "KITCHEN_QUEUE_DATA_PATH"
_LOG_PATH_ENV = "KITCHEN_QUEUE_LOG_PATH"
_LEGACY_ITEMS_ENV = "KITCHEN_QUEUE_LEGACY_ITEMS"

DATA_PATH = os.environ.get(_DATA_PATH_ENV, "").strip() or "data/orders.txt"
DEBUG_LOG_PATH = os.environ.get(_LOG_PATH_ENV, "").strip() or "/tmp/kitchen-queue-debug.log"

# Phone/DoorDash orders skipped this many times jump ahead of drive-through/onsite.
MAX_SKIP_COUNT = 3
DOORDASH_FEE_RATE = Decimal("0.05")

# Existing order files are read with the item count minus one (last item dropped).
LEGACY_DROP_LAST_ITEM = os.environ.get(_LEGACY_ITEMS_ENV, "1").strip().lower() not in {"0", "false", "no", "off"}
