"""Open-Meteo weather driver.

Public API:
  - driver: OpenMeteoDriver
  - client: API URLs, requested variables
  - codes: WMO code icon/description tables
"""

from desklet_weather.drivers.openmeteo.driver import OpenMeteoDriver

__all__ = ["OpenMeteoDriver"]
