"""Data access helpers for scan event queries."""
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from psycopg2.extras import RealDictCursor

from ..db import get_connection
from ..logging_config import get_logger

log = get_logger(__name__)


SCANS_SINCE_QUERY = """
    SELECT
        s.qr_id,
        s.ip,
        s.program,
        s.publisher,
        s.conversion,
        s.asv_seconds,
        s.created_at
    FROM
        scans s
    WHERE
        s.created_at >= %s
    ORDER BY
        s.created_at ASC;
"""


SCANS_FOR_IP_QUERY = """
    SELECT
        s.qr_id,
        s.ip,
        s.program,
        s.publisher,
        s.conversion,
        s.asv_seconds,
        s.created_at
    FROM
        scans s
    WHERE
        s.created_at >= %s
        AND s.ip = %s
    ORDER BY
        s.created_at ASC;
"""


def fetch_scans(since: datetime, ip: Optional[str] = None) -> Optional[List[Dict[str, object]]]:
    """Return scan rows created at or after ``since``.

    Returns ``None`` if the database could not be queried, so callers can tell
    a failed read apart from an empty window.
    """

    if ip is None:
        query, params = SCANS_SINCE_QUERY, (since,)
    else:
        query, params = SCANS_FOR_IP_QUERY, (since, ip)

    try:
        with get_connection() as conn, conn.cursor(cursor_factory=RealDictCursor) as cursor:
            cursor.execute(query, params)
            records: Iterable[Dict[str, object]] = cursor.fetchall()
            payload = [dict(record) for record in records]
            log.info("Retrieved %d scan records since %s", len(payload), since.isoformat())
            return payload
    except Exception:  # pragma: no cover - operational errors logged
        log.exception("Failed to fetch scan data since %s", since.isoformat())
        return None
