"""ICAO countries.

Countries are read from a tab separated file mapping the ICAO country prefix
to the country name:

    AG	Solomon Islands
    AN	Nauru
"""

from dataclasses import dataclass
from pathlib import Path

from oldnav.core.logging_system import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Country:
    """A country recognised in the ICAO codes.

    Attributes:
        code: ICAO country code (e.g., "AG").
        name: Country name (e.g., "Solomon Islands").
    """

    code: str
    name: str

    def __str__(self) -> str:
        return f"Country: {{code: {self.code}, name: {self.name}}}"


def read_countries(path: Path | str) -> dict[str, Country]:
    """Read countries from a tab separated file.

    Blank lines are ignored; malformed lines are logged and skipped.

    Args:
        path: Path to icao_countries.txt.

    Returns:
        Mapping of country code to Country.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    countries: dict[str, Country] = {}

    with open(path, encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue

            parts = line.split("\t")
            if len(parts) < 2 or not parts[0].strip():
                logger.warning("Skipping malformed country line %d in %s: %r", line_number, path, line)
                continue

            code = parts[0].strip()
            countries[code] = Country(code=code, name=parts[1].strip())

    logger.info("Loaded %d countries from %s", len(countries), path)
    return countries
