"""Parser for the reservation confirmation page"""
import re
from datetime import datetime
from typing import List, Optional, Sequence
from bs4 import BeautifulSoup

from ..errors import DetailsMissing, DetailsUnparsed, StatusMissing, TimeUnparsed
from ..models import ClassDetails, ReservationResult
from ..utils.logger import setup_logger
from ..utils.timezone import to_utc

logger = setup_logger(__name__)

# Element ids generated by the provider's page builder, newest layout first.
# Equivalent to //div[@id='...'] lookups.
STATUS_SELECTORS = [
    "div#AthleteTheme_wt12_block_wtTitle",
    "div#W_Theme_UI_wt12_block_wtTitle",
]
DETAILS_SELECTORS = [
    "div#AthleteTheme_wt12_block_wtMainContent",
    "div#W_Theme_UI_wt12_block_wtMainContent",
]

# Labels and values are separated by non-breaking spaces; widen to \s+ if
# the provider ever drops them. End time and Location are skipped.
CLASS_DETAILS_PATTERN = re.compile(
    r'Date:\xa0+(\d{2}), (.*) (\d{4})Start time:\xa0+(.*) at (.*)End.*Program:\xa0+(.*)Location.*'
)

TIME_FORMAT = "%A, %B %d, %Y, %H:%M"


class ConfirmationParser:
    """Extracts status and class details from a confirmation page"""

    def __init__(
        self,
        status_selectors: Optional[Sequence[str]] = None,
        details_selectors: Optional[Sequence[str]] = None
    ):
        """
        Initialize confirmation parser

        Args:
            status_selectors: Selectors tried in order for the status headline
            details_selectors: Selectors tried in order for the details block
        """
        self.status_selectors = list(status_selectors or STATUS_SELECTORS)
        self.details_selectors = list(details_selectors or DETAILS_SELECTORS)

    def parse(self, html, url: Optional[str] = None) -> ReservationResult:
        """
        Parse a confirmation page

        Args:
            html: Page content (bytes or str)
            url: Acceptance URL the page came from, attached to errors

        Returns:
            ReservationResult with status sentence and class details

        Raises:
            StatusMissing: If no status node is present
            DetailsMissing: If no details node is present
            DetailsUnparsed: If the details text does not match
            TimeUnparsed: If the class date is not a valid timestamp
        """
        soup = BeautifulSoup(html, 'lxml')

        status_node = self._find_one(soup, self.status_selectors)
        if status_node is None:
            raise StatusMissing(url=url)

        details_node = self._find_one(soup, self.details_selectors)
        if details_node is None:
            raise DetailsMissing(url=url)

        status = status_node.get_text()
        details = self.parse_details(details_node.get_text(), url=url)

        return ReservationResult(status=status, details=details)

    def parse_details(self, text: str, url: Optional[str] = None) -> ClassDetails:
        """Match the details block text and build ClassDetails"""
        match = CLASS_DETAILS_PATTERN.search(text)
        if match is None:
            logger.debug(f"Details text did not match: {text!r}")
            raise DetailsUnparsed(url=url)

        day, month, year, week_day, time_str, program = match.groups()
        class_time = parse_class_time(week_day, month, day, year, time_str, url=url)

        return ClassDetails(program=program, time=class_time)

    def _find_one(self, soup: BeautifulSoup, selectors: List[str]):
        """Return the first node matched by any selector"""
        for selector in selectors:
            node = soup.select_one(selector)
            if node is not None:
                return node
        return None


def assemble_time_string(week_day: str, month: str, day: str, year: str, time_str: str) -> str:
    """Build e.g. 'Tuesday, October 15, 2024, 18:30'"""
    return f"{week_day}, {month} {day}, {year}, {time_str}"


def parse_class_time(
    week_day: str,
    month: str,
    day: str,
    year: str,
    time_str: str,
    url: Optional[str] = None
) -> datetime:
    """
    Parse the captured date fields into an aware UTC datetime

    Raises:
        TimeUnparsed: If the fields do not form a date, or the weekday
            does not agree with it
    """
    value = assemble_time_string(week_day, month, day, year, time_str)
    try:
        parsed = datetime.strptime(value, TIME_FORMAT)
    except ValueError as e:
        raise TimeUnparsed(f"parsing time {value!r}: {e}", url=url) from e

    if parsed.strftime("%A").lower() != week_day.lower():
        raise TimeUnparsed(
            f"parsing time {value!r}: {week_day} does not match {parsed.strftime('%A')}",
            url=url
        )

    return to_utc(parsed)

