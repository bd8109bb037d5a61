"""Adaptadores de I/O: CSV, HTTP (GitHub) y exportación."""
