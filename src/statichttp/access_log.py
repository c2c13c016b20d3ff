"""
=============================================================================
ACCESS LOG
=============================================================================

One log record per served request, on the "statichttp.access" logger.

    TEXT:  127.0.0.1 - - [18/Oct/2026:12:00:01 +0000] "GET /a.html" 200 5120 0.42ms
    JSON:  {"request_id": "3f2a9c1e", "method": "GET", "path": "/a.html", ...}

The logger is namespaced so it can be routed on its own:

    logging.getLogger("statichttp.access").addHandler(file_handler)
    logging.getLogger("statichttp.access").setLevel(logging.WARNING)  # mute

=============================================================================
"""

import json
import logging
import time
from dataclasses import dataclass, asdict
from typing import Optional


logger = logging.getLogger("statichttp.access")


@dataclass
class RequestLog:
    """
    Structured log entry for a request.

    request_id:     Connection ID, matches the [id] in debug logs
    method:         HTTP method as sent ("-" if the line did not parse)
    path:           Request path ("-" if the line did not parse)
    query:          Query string, "" when absent
    client_ip:      Client's IP address
    status_code:    HTTP status sent
    content_length: Response body size in bytes
    duration_ms:    Time from accept to response sent
    timestamp:      When the response was sent
    """

    request_id: str
    method: str
    path: str
    query: str
    client_ip: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        data = asdict(self)
        data["duration_ms"] = round(self.duration_ms, 2)
        return data

    def to_text(self) -> str:
        """Format close to the Apache common log format."""
        target = f"{self.path}?{self.query}" if self.query else self.path
        return (
            f'{self.client_ip} - - [{self.timestamp}] '
            f'"{self.method} {target}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )


def log_request(
    *,
    request_id: str,
    client_ip: str,
    status_code: int,
    content_length: int,
    started_at: float,
    method: str = "-",
    path: str = "-",
    query: Optional[str] = None,
    log_format: str = "text",
    level: int = logging.INFO,
) -> RequestLog:
    """
    Build a RequestLog and emit it.

    Args:
        started_at: time.time() when the connection was accepted.
        log_format: "text" or "json".

    Returns:
        The emitted entry.
    """
    entry = RequestLog(
        request_id=request_id,
        method=method,
        path=path,
        query=query or "",
        client_ip=client_ip,
        status_code=int(status_code),
        content_length=content_length,
        duration_ms=(time.time() - started_at) * 1000,
        timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
    )

    if log_format == "json":
        logger.log(level, json.dumps(entry.to_dict()))
    else:
        logger.log(level, entry.to_text())

    return entry
