"""Field-name and value heuristics for index suggestions."""

from __future__ import annotations

import re

ID_MARKERS = ("id",)
ID_SUFFIXES = ("_id",)
TEMPORAL_MARKERS = ("date", "time")
IDENTITY_MARKERS = ("name", "email", "username")

DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")

REASON_ID = "id_field"
REASON_TEMPORAL = "temporal_field"
REASON_IDENTITY = "identity_field"

COMPOUND_INDEX_WIDTH = 2
