"""Servicios del Core: aprovisionamiento de labels, creación de issues y pipeline."""
