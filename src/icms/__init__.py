"""ICMS: internal corporate management system API."""
