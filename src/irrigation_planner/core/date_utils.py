"""
Date and timezone utilities.

Centralizes timestamp handling for design requests, responses and project records.
"""

import calendar
import logging
from datetime import datetime
from typing import Optional
import pytz
from pytz.tzinfo import BaseTzInfo


class DateUtils:
    """Utilities for date and timezone handling."""

    def __init__(
        self,
        timezone_str: str = "UTC",
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize date utilities.

        Args:
            timezone_str: Timezone used for generated timestamps
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.timezone = self.parse_timezone(timezone_str)

    @staticmethod
    def parse_timezone(timezone_str: str) -> BaseTzInfo:
        """
        Parse timezone string to pytz timezone object.

        Args:
            timezone_str: Timezone string (e.g., 'Asia/Bangkok', 'UTC')

        Returns:
            pytz timezone object

        Raises:
            ValueError: If timezone is invalid
        """
        try:
            return pytz.timezone(timezone_str)
        except pytz.exceptions.UnknownTimeZoneError:
            raise ValueError(f"Invalid timezone: {timezone_str}")

    def now(self, reference_time: Optional[datetime] = None) -> datetime:
        """
        Current time in the configured timezone.

        Args:
            reference_time: Fixed reference time (naive values are taken as UTC)

        Returns:
            Timezone-aware datetime
        """
        if reference_time is None:
            reference_time = datetime.now(pytz.UTC)
        local_time = self.to_utc(reference_time).astimezone(self.timezone)
        self.logger.debug(f"Timestamp resolved to {local_time.isoformat()}")
        return local_time

    def timestamp(self, reference_time: Optional[datetime] = None) -> str:
        """ISO timestamp with offset in the configured timezone."""
        return self.to_iso_with_timezone(self.now(reference_time))

    @staticmethod
    def to_iso_with_timezone(dt: datetime) -> str:
        """
        Convert datetime to ISO format string with timezone.

        Args:
            dt: Datetime object (should be timezone-aware)

        Returns:
            ISO format string with timezone (e.g., '2024-01-15T00:00:00+07:00')

        Raises:
            ValueError: If datetime is not timezone-aware
        """
        if dt.tzinfo is None:
            raise ValueError("Datetime must be timezone-aware")

        return dt.isoformat()

    @staticmethod
    def to_utc(dt: datetime) -> datetime:
        """
        Convert datetime to UTC.

        Args:
            dt: Datetime object (can be naive or aware)

        Returns:
            Datetime in UTC (timezone-aware)
        """
        if dt.tzinfo is None:
            return pytz.UTC.localize(dt)
        return dt.astimezone(pytz.UTC)

    @staticmethod
    def days_in_month(year: int, month_index: int) -> int:
        """
        Number of days in a month.

        Args:
            year: Calendar year
            month_index: Zero-based month (0 = January)

        Returns:
            Day count, accounting for leap years
        """
        return calendar.monthrange(year, month_index + 1)[1]
