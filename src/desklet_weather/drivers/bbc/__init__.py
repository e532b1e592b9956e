"""BBC Weather driver.

Public API:
  - driver: BBCDriver
  - client: locator and weather-broker URLs (the locator is shared with NWS)
  - codes: weatherType icon table, phrase normalization
"""

from desklet_weather.drivers.bbc.driver import BBCDriver

__all__ = ["BBCDriver"]
