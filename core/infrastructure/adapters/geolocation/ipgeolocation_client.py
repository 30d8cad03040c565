"""
ipgeolocation.io adapter.

Resolves IP addresses to places via the ipgeolocation.io REST API.
"""
import ipaddress
import logging
from typing import Any, Dict

from core.application.dtos.location_dto import LocationDTO
from core.application.interfaces import IGeolocationProvider
from core.domain.exceptions import CollaboratorError, InvalidInputError
from core.infrastructure.adapters.http import request_json
from core.settings.modules.integrations_settings import IPGeolocationSettings


logger = logging.getLogger(__name__)

_FIELDS = "country_name,state_prov,city,latitude,longitude,time_zone,isp"


def is_valid_ip(ip: str) -> bool:
    """IPv4 or IPv6 in canonical or compressed form, without surrounding whitespace."""
    if not isinstance(ip, str) or ip != ip.strip():
        return False
    try:
        ipaddress.ip_address(ip)
    except ValueError:
        return False
    return True


class IPGeolocationClient(IGeolocationProvider):
    """
    ipgeolocation.io implementation of IGeolocationProvider.
    """

    def __init__(self, settings: IPGeolocationSettings):
        """
        Initialize client.

        Args:
            settings: Base URL and timeout (the key is passed per call)
        """
        self.base_url = settings.base_url
        self.timeout_seconds = settings.timeout_seconds

    def is_valid_ip(self, ip: str) -> bool:
        return is_valid_ip(ip)

    async def get_location(self, ip: str, api_key: str) -> LocationDTO:
        if not self.is_valid_ip(ip):
            raise InvalidInputError(f"Invalid IP address: {ip}")

        try:
            data = await request_json(
                "GET",
                self.base_url,
                service="Geolocation",
                timeout_seconds=self.timeout_seconds,
                params={"apiKey": api_key, "ip": ip, "fields": _FIELDS},
            )
            if not isinstance(data, dict):
                raise CollaboratorError("Geolocation API returned an unexpected payload")
            if data.get("message"):
                raise CollaboratorError(f"Geolocation API error: {data['message']}")
            location = self.to_location(ip, data)
        except CollaboratorError as e:
            logger.error(f"Error getting location from IP {ip}: {e}")
            raise type(e)(f"Failed to get location for IP {ip}: {e}", status_code=e.status_code) from e

        logger.info(f"Resolved {ip} to {location.display_name}")
        return location

    @staticmethod
    def to_location(ip: str, data: Dict[str, Any]) -> LocationDTO:
        """Map an ipgeolocation.io payload onto LocationDTO."""
        time_zone = data.get("time_zone")
        if isinstance(time_zone, dict):
            timezone = time_zone.get("name")
        else:
            timezone = data.get("timezone_name") or time_zone

        return LocationDTO(
            ip=ip,
            country=data.get("country_name") or "Unknown",
            region=data.get("state_prov") or "Unknown",
            city=data.get("city") or "Unknown",
            latitude=_to_float(data.get("latitude")),
            longitude=_to_float(data.get("longitude")),
            timezone=timezone or "UTC",
            isp=data.get("isp") or None,
        )


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0
