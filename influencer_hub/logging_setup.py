# Copyright (c) 2026 Mohammed Hassan. All rights reserved.
# Proprietary and confidential. Unauthorized copying, modification, distribution, or use is prohibited.

import contextvars
import json
import logging
import logging.handlers
import queue
import sys
from datetime import datetime, timezone
import requests
from pythonjsonlogger import jsonlogger
from .config import settings

SERVICE_NAME = "influencer-hub"
REDACTED = "***REDACTED***"

# Field names containing any of these are masked
SECRET_MARKERS = ("token", "secret", "password", "key", "authorization", "cookie")

request_id_var = contextvars.ContextVar("request_id", default=None)

_listener = None

def redact(record: dict) -> dict:
    for key, value in record.items():
        if isinstance(value, str) and any(marker in key.lower() for marker in SECRET_MARKERS):
            record[key] = REDACTED
    return record

class ServiceContextFilter(logging.Filter):
    """Stamps records with the service, environment and current request id."""

    def filter(self, record):
        record.service_name = SERVICE_NAME
        record.environment = settings.environment
        record.request_id = request_id_var.get()
        return True

class RedactingJsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.fromtimestamp(record.created, timezone.utc).isoformat()
        log_record["level"] = record.levelname
        if log_record.get("request_id") is None:
            log_record.pop("request_id", None)
        redact(log_record)

class AxiomHandler(logging.handlers.BufferingHandler):
    """
    Buffers formatted records and posts them to an Axiom dataset once the
    buffer is full (and on close). A failed post is reported on stderr and
    the batch is dropped.
    """

    def __init__(self, capacity: int = 50, timeout: float = 5.0):
        super().__init__(capacity)
        self.timeout = timeout

    def ingest_url(self) -> str:
        return f"{settings.axiom_url.rstrip('/')}/v1/datasets/{settings.axiom_dataset}/ingest"

    def flush(self):
        self.acquire()
        try:
            batch = [json.loads(self.format(r)) for r in self.buffer]
            self.buffer = []
        finally:
            self.release()
        if not batch or not settings.axiom_token or not settings.axiom_dataset:
            return

        headers = {"Authorization": f"Bearer {settings.axiom_token}"}
        if settings.axiom_org_id:
            headers["X-Axiom-Org-Id"] = settings.axiom_org_id
        try:
            requests.post(self.ingest_url(), headers=headers, json=batch, timeout=self.timeout)
        except requests.RequestException as e:
            sys.stderr.write(f"axiom: dropped {len(batch)} log records: {e}\n")

def setup_logging(level: str | None = None):
    """
    JSON logs to stdout. When Axiom is configured, records also go through a
    queue to a listener thread so shipping never runs on the request path.
    """
    global _listener

    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    if _listener is not None:
        _listener.stop()
        _listener = None

    formatter = RedactingJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    context = ServiceContextFilter()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    console.addFilter(context)
    root.addHandler(console)

    if settings.axiom_token and settings.axiom_dataset:
        axiom = AxiomHandler()
        axiom.setFormatter(formatter)
        records = queue.SimpleQueue()
        queued = logging.handlers.QueueHandler(records)
        queued.addFilter(context)
        _listener = logging.handlers.QueueListener(records, axiom)
        _listener.start()
        root.addHandler(queued)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

def log_event(event: str, level: str = "info", **fields):
    """Log a structured event; None-valued fields are dropped."""
    extra = {k: v for k, v in fields.items() if v is not None}
    extra["event"] = event
    logging.getLogger(SERVICE_NAME).log(getattr(logging, level.upper(), logging.INFO), event, extra=extra)
