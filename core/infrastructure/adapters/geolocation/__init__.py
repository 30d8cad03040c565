"""Geolocation adapters."""
from .ipgeolocation_client import IPGeolocationClient, is_valid_ip

__all__ = ["IPGeolocationClient", "is_valid_ip"]
