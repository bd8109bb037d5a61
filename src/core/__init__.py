"""Core: dominio, configuración y servicios (sin CLI)."""
