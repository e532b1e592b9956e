"""US National Weather Service driver.

Public API:
  - driver: NWSDriver
  - client: point/station/forecast URL helpers, icon slug extraction
  - codes: icon slug table
"""

from desklet_weather.drivers.nws.driver import NWSDriver

__all__ = ["NWSDriver"]
