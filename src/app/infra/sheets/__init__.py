"""Integração com Google Sheets."""

from .google_sheets_client import GoogleSheetsClient, GoogleSheetsClientFactory

__all__ = ["GoogleSheetsClient", "GoogleSheetsClientFactory"]
