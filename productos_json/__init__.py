"""Servicio REST mínimo de productos persistidos en un archivo JSON."""
