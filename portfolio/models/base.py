"""Shared column helpers for the portfolio models"""
from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, String

# Opaque identifiers are UUID4 strings stored as VARCHAR(36) on every dialect
ID_LENGTH = 36


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp (SQLite has no timezone-aware DATETIME)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def id_column() -> Column:
    return Column(String(ID_LENGTH), primary_key=True, default=generate_uuid)
