"""Google Weather driver.

Public API:
  - driver: GoogleWeatherDriver
  - client: Weather API and Nominatim URLs, BCP-47 language map
  - codes: weatherCondition.type icon table
"""

from desklet_weather.drivers.google.driver import GoogleWeatherDriver

__all__ = ["GoogleWeatherDriver"]
