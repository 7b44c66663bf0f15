"""Region table and location matching rules."""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Iterable, List, Mapping, Sequence

from core.errors import InvalidRegionError


class RegionTable:
    """Read-only view of region name -> ordered location strings.

    Region names are exact keys. Location strings are matched against
    scraped post locations case-insensitively, as substrings.
    """

    def __init__(self, regions: Mapping[str, Sequence[str]]) -> None:
        self._regions = MappingProxyType({name: tuple(cities) for name, cities in regions.items()})

    @property
    def names(self) -> List[str]:
        return list(self._regions)

    def __contains__(self, region_name: object) -> bool:
        return region_name in self._regions

    def cities(self, region_name: str) -> tuple[str, ...]:
        try:
            return self._regions[region_name]
        except KeyError:
            raise InvalidRegionError(region_name, self.names) from None

    def validate(self, region_names: Iterable[str]) -> List[str]:
        """Return ``region_names`` de-duplicated in order, or raise on the first unknown one."""
        validated: List[str] = []
        for name in region_names:
            if name not in self._regions:
                raise InvalidRegionError(name, self.names)
            if name not in validated:
                validated.append(name)
        return validated

    def cities_for_regions(self, region_names: Iterable[str]) -> List[str]:
        seen: dict[str, None] = {}
        for name in self.validate(region_names):
            for city in self._regions[name]:
                seen.setdefault(city, None)
        return list(seen)

    def matches_region(self, location: str, region_name: str) -> bool:
        return any(_contains(location, city) for city in self.cities(region_name))

    def is_known_location(self, location: str) -> bool:
        return any(
            _contains(location, city)
            for cities in self._regions.values()
            for city in cities
        )


def _contains(location: str, city: str) -> bool:
    return re.search(re.escape(city), location, flags=re.IGNORECASE) is not None


def parse_region_param(param: str, table: RegionTable) -> List[str]:
    """Split a ``--regions a,b`` value and validate every name."""
    names = [value.strip() for value in param.split(",") if value.strip()]
    return table.validate(names)
