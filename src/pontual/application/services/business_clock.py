"""Business calendar in the operation's local timezone."""

from datetime import date, datetime
from zoneinfo import ZoneInfo


class BusinessClock:
    """Tells which day it is where attendance is taken."""

    def __init__(self, timezone: str = "America/Sao_Paulo") -> None:
        self._tz = ZoneInfo(timezone)

    def today(self) -> date:
        return datetime.now(self._tz).date()

    def is_past(self, day: date) -> bool:
        return day < self.today()
