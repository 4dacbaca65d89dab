"""AIRAC cycle metadata.

X-Plane navigation data ships a cycle_info.txt describing the 28 day AIRAC
cycle it is valid for:

    AIRAC cycle    : 1607
    Version        : 1
    Valid (from/to): 23/JUN/2016 - 21/JUL/2016
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from oldnav.core.logging_system import get_logger

logger = get_logger(__name__)

CYCLE_PATTERN = re.compile(r"AIRAC cycle\s*:\s*(\d{4})", re.IGNORECASE)
VERSION_PATTERN = re.compile(r"Version\s*:\s*(\d+)", re.IGNORECASE)
VALIDITY_PATTERN = re.compile(
    r"Valid \(from/to\)\s*:\s*(\d{1,2}/[A-Za-z]{3}/\d{4})\s*-\s*(\d{1,2}/[A-Za-z]{3}/\d{4})",
    re.IGNORECASE,
)
DATE_FORMAT = "%d/%b/%Y"


@dataclass(frozen=True)
class AiracCycle:
    """AIRAC cycle the navigation data is valid for.

    Attributes:
        cycle: Cycle identifier, YYNN (e.g., "1607").
        version: Data revision within the cycle.
        valid_from: First day of validity.
        valid_to: Last day of validity.
    """

    cycle: str
    version: int
    valid_from: date
    valid_to: date

    def is_valid_on(self, day: date) -> bool:
        """Check whether the cycle covers a given day (both ends included)."""
        return self.valid_from <= day <= self.valid_to


def parse_airac_cycle(text: str) -> AiracCycle:
    """Parse the contents of a cycle_info.txt file.

    Raises:
        ValueError: If the cycle number or validity dates are missing.
    """
    cycle_match = CYCLE_PATTERN.search(text)
    if cycle_match is None:
        raise ValueError("No AIRAC cycle found in cycle info")

    validity_match = VALIDITY_PATTERN.search(text)
    if validity_match is None:
        raise ValueError("No validity period found in cycle info")

    version_match = VERSION_PATTERN.search(text)
    version = int(version_match.group(1)) if version_match else 1

    return AiracCycle(
        cycle=cycle_match.group(1),
        version=version,
        valid_from=datetime.strptime(validity_match.group(1), DATE_FORMAT).date(),
        valid_to=datetime.strptime(validity_match.group(2), DATE_FORMAT).date(),
    )


def read_airac_cycle(path: Path | str) -> AiracCycle:
    """Read AIRAC cycle metadata from a cycle_info.txt file."""
    path = Path(path)
    cycle = parse_airac_cycle(path.read_text(encoding="utf-8"))
    logger.info(
        "AIRAC cycle %s (v%d) valid %s to %s",
        cycle.cycle,
        cycle.version,
        cycle.valid_from,
        cycle.valid_to,
    )
    return cycle
