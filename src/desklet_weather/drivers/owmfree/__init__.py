"""OpenWeatherMap free-tier weather driver.

Public API:
  - driver: OWMFreeDriver
  - client: API URLs, language map, request parameters
  - codes: icon table and severity priority
"""

from desklet_weather.drivers.owmfree.driver import OWMFreeDriver

__all__ = ["OWMFreeDriver"]
