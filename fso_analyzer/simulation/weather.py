"""
Weather profiles for FSO link simulation.

Each weather condition maps to exactly one immutable profile carrying a
linear attenuation coefficient (dB/km) plus the display fields used by
presentation layers.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Union


class WeatherType(str, Enum):
    """Enumerated weather conditions."""
    CLEAR = "CLEAR"
    HAZE = "HAZE"
    RAIN = "RAIN"
    FOG = "FOG"


@dataclass(frozen=True)
class WeatherProfile:
    """Container for per-condition atmospheric parameters."""
    attenuation_coefficient: float  # dB/km
    label: str = ""
    description: str = ""
    particle_color: str = "#ffffff"
    intensity: float = 0.0  # 0-1, visual density only

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)


WEATHER_PROFILES: Mapping[WeatherType, WeatherProfile] = MappingProxyType({
    WeatherType.CLEAR: WeatherProfile(
        attenuation_coefficient=0.43,
        label="Clear Sky",
        description="Optimal conditions with minimal scattering.",
        particle_color="#ffffff",
        intensity=0.1,
    ),
    WeatherType.HAZE: WeatherProfile(
        attenuation_coefficient=2.37,
        label="Haze",
        description="Moderate scattering due to dust and aerosols.",
        particle_color="#94a3b8",
        intensity=0.4,
    ),
    WeatherType.RAIN: WeatherProfile(
        attenuation_coefficient=19.2,
        label="Heavy Rain",
        description="High attenuation caused by droplet absorption and scattering.",
        particle_color="#60a5fa",
        intensity=0.7,
    ),
    WeatherType.FOG: WeatherProfile(
        attenuation_coefficient=25.5,
        label="Thick Fog",
        description="Severe signal degradation due to dense water vapor.",
        particle_color="#f1f5f9",
        intensity=1.0,
    ),
})


def parse_weather(weather: Union[str, WeatherType]) -> WeatherType:
    """
    Resolve a weather name (case-insensitive) to a WeatherType.

    Args:
        weather: Weather name or WeatherType member

    Returns:
        Matching WeatherType
    """
    if isinstance(weather, WeatherType):
        return weather
    try:
        return WeatherType(str(weather).strip().upper())
    except ValueError:
        valid = [w.value.lower() for w in WeatherType]
        raise ValueError(f"Unknown weather condition: {weather}. Valid conditions: {valid}")


def get_weather_profile(weather: Union[str, WeatherType]) -> WeatherProfile:
    """Look up the static profile for a weather condition."""
    return WEATHER_PROFILES[parse_weather(weather)]
