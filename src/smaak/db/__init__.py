"""Smaak - Database access (Supabase)."""

from smaak.db.client import get_client, upsert_rows

__all__ = ["get_client", "upsert_rows"]
