from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

FALLBACK_IP = "ipf"
IP_ACCURACY_METERS = 600000.0


class _RequestModel(BaseModel):
    # Accept both the camelCase wire names and snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class BluetoothBeacon(_RequestModel):
    mac_address: str
    age: int | None = None
    name: str | None = None
    signal_strength: int | None = None


class CellTower(_RequestModel):
    radio_type: str | None = None
    mobile_country_code: int
    mobile_network_code: int
    location_area_code: int
    cell_id: int
    age: int | None = None
    psc: int | None = None
    signal_strength: int | None = None
    timing_advance: int | None = None


class WifiAccessPoint(_RequestModel):
    mac_address: str
    age: int | None = None
    channel: int | None = None
    frequency: int | None = None
    signal_strength: int | None = None
    signal_to_noise_ratio: int | None = None


class Fallbacks(_RequestModel):
    lacf: bool = True
    ipf: bool = True


class GeolocateRequest(_RequestModel):
    """Geolocation API request body.

    Radio observations are validated but not used: every answer is an IP
    fallback.
    """

    carrier: str | None = None
    consider_ip: bool | None = None
    home_mobile_country_code: int | None = None
    home_mobile_network_code: int | None = None
    bluetooth_beacons: list[BluetoothBeacon] | None = None
    cell_towers: list[CellTower] | None = None
    wifi_access_points: list[WifiAccessPoint] | None = None
    fallbacks: Fallbacks | None = None


class Location(BaseModel):
    lat: float = Field(description="Latitude in degrees")
    lng: float = Field(description="Longitude in degrees")


class GeolocateResponse(BaseModel):
    location: Location
    accuracy: float = Field(default=IP_ACCURACY_METERS, description="Accuracy radius in meters")
    fallback: str = Field(default=FALLBACK_IP, description="Positioning method used")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"location": {"lat": 47.0, "lng": 8.0}, "accuracy": 600000.0, "fallback": "ipf"}
            ]
        }
    }


class CountryResponse(BaseModel):
    country_code: str = Field(description="ISO 3166-1 alpha-2 code")
    country_name: str = Field(description="Country name (may be empty)")
    fallback: str = Field(default=FALLBACK_IP, description="Positioning method used")

    model_config = {
        "json_schema_extra": {
            "examples": [{"country_code": "CH", "country_name": "Switzerland", "fallback": "ipf"}]
        }
    }
