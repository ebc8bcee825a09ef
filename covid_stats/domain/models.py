"""Value objects built from disease.sh payloads or from cached copies of them."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

Payload = Mapping[str, Any]

# (attribute, payload key) pairs for the flat numeric fields of a country payload
_COUNTRY_NUMERIC_FIELDS = (
    ("updated", "updated"),
    ("cases", "cases"),
    ("today_cases", "todayCases"),
    ("deaths", "deaths"),
    ("today_deaths", "todayDeaths"),
    ("recovered", "recovered"),
    ("today_recovered", "todayRecovered"),
    ("active", "active"),
    ("critical", "critical"),
    ("cases_per_one_million", "casesPerOneMillion"),
    ("deaths_per_one_million", "deathsPerOneMillion"),
    ("tests", "tests"),
    ("tests_per_one_million", "testsPerOneMillion"),
    ("population", "population"),
    ("one_case_per_people", "oneCasePerPeople"),
    ("one_death_per_people", "oneDeathPerPeople"),
    ("one_test_per_people", "oneTestPerPeople"),
    ("active_per_one_million", "activePerOneMillion"),
    ("recovered_per_one_million", "recoveredPerOneMillion"),
    ("critical_per_one_million", "criticalPerOneMillion"),
)


def _number(value: Any) -> float | int:
    return value if value else 0


def _text(value: Any) -> str:
    return value if value else ""


def _percentage(part: float, whole: float) -> str:
    if whole == 0:
        return "0.00"
    return f"{part / whole * 100:.2f}"


@dataclass(frozen=True)
class CountryInfo:
    """Identity sub-record of a country (numeric id, ISO codes, position, flag)."""

    id: int = 0
    iso2: str = ""
    iso3: str = ""
    lat: float = 0
    long: float = 0
    flag: str = ""

    @classmethod
    def from_payload(cls, data: Optional[Payload]) -> CountryInfo:
        if not data:
            return cls()
        return cls(
            id=_number(data.get("_id")),
            iso2=_text(data.get("iso2")),
            iso3=_text(data.get("iso3")),
            lat=_number(data.get("lat")),
            long=_number(data.get("long")),
            flag=_text(data.get("flag")),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "_id": self.id,
            "iso2": self.iso2,
            "iso3": self.iso3,
            "lat": self.lat,
            "long": self.long,
            "flag": self.flag,
        }


@dataclass(frozen=True)
class CountryRecord:
    """Cumulative and daily statistics for one country.

    Missing, null or falsy input fields are filled with ``0`` / ``""`` so a
    record is never partially defined.
    """

    country: str = ""
    country_info: CountryInfo = field(default_factory=CountryInfo)
    continent: str = ""
    updated: int = 0
    cases: int = 0
    today_cases: int = 0
    deaths: int = 0
    today_deaths: int = 0
    recovered: int = 0
    today_recovered: int = 0
    active: int = 0
    critical: int = 0
    cases_per_one_million: float = 0
    deaths_per_one_million: float = 0
    tests: int = 0
    tests_per_one_million: float = 0
    population: int = 0
    one_case_per_people: float = 0
    one_death_per_people: float = 0
    one_test_per_people: float = 0
    active_per_one_million: float = 0
    recovered_per_one_million: float = 0
    critical_per_one_million: float = 0

    @classmethod
    def from_payload(cls, data: Payload) -> CountryRecord:
        numeric = {attr: _number(data.get(key)) for attr, key in _COUNTRY_NUMERIC_FIELDS}
        return cls(
            country=_text(data.get("country")),
            country_info=CountryInfo.from_payload(data.get("countryInfo")),
            continent=_text(data.get("continent")),
            **numeric,
        )

    @classmethod
    def from_list(cls, items: Iterable[Payload]) -> List[CountryRecord]:
        return [cls.from_payload(item) for item in items]

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "country": self.country,
            "countryInfo": self.country_info.to_payload(),
            "continent": self.continent,
        }
        for attr, key in _COUNTRY_NUMERIC_FIELDS:
            payload[key] = getattr(self, attr)
        return payload

    @property
    def death_rate(self) -> str:
        return _percentage(self.deaths, self.cases)

    @property
    def recovery_rate(self) -> str:
        return _percentage(self.recovered, self.cases)

    @property
    def active_rate(self) -> str:
        return _percentage(self.active, self.cases)

    def rates(self) -> Dict[str, str]:
        return {
            "deathRate": self.death_rate,
            "recoveryRate": self.recovery_rate,
            "activeRate": self.active_rate,
        }


def sort_by_cases(records: Iterable[CountryRecord]) -> List[CountryRecord]:
    """Return records ordered by cumulative cases, highest first."""
    return sorted(records, key=lambda record: record.cases, reverse=True)


def search_by_name(records: Iterable[CountryRecord], query: str) -> List[CountryRecord]:
    """Case-insensitive substring match on the country name; blank query keeps all."""
    needle = query.strip().lower()
    if not needle:
        return list(records)
    return [record for record in records if needle in record.country.lower()]


@dataclass(frozen=True)
class ChartPoint:
    date: str
    cases: int = 0
    deaths: int = 0
    recovered: int = 0

    def to_payload(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "cases": self.cases,
            "deaths": self.deaths,
            "recovered": self.recovered,
        }


def _frozen(mapping: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(mapping))


def short_date(date_key: str) -> str:
    """Reduce a ``M/D/YY`` key to ``M/D``."""
    parts = date_key.split("/")
    return "/".join(parts[:2])


@dataclass(frozen=True)
class HistoricalSeries:
    """Date-keyed cases/deaths/recovered series for one country.

    The three mappings keep the insertion order of the source payload; that
    order, not calendar order, drives ``chart_points`` and ``latest``.
    They are read-only views over private copies of the payload.
    """

    country: str = ""
    province: Tuple[str, ...] = ()
    cases: Mapping[str, int] = field(default_factory=lambda: _frozen({}))
    deaths: Mapping[str, int] = field(default_factory=lambda: _frozen({}))
    recovered: Mapping[str, int] = field(default_factory=lambda: _frozen({}))

    def __hash__(self) -> int:
        return hash((
            self.country,
            self.province,
            tuple(self.cases.items()),
            tuple(self.deaths.items()),
            tuple(self.recovered.items()),
        ))

    @classmethod
    def from_payload(cls, data: Payload) -> HistoricalSeries:
        timeline = data.get("timeline") or {}
        return cls(
            country=_text(data.get("country")),
            province=tuple(data.get("province") or ()),
            cases=_frozen(timeline.get("cases") or {}),
            deaths=_frozen(timeline.get("deaths") or {}),
            recovered=_frozen(timeline.get("recovered") or {}),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "country": self.country,
            "province": list(self.province),
            "timeline": {
                "cases": dict(self.cases),
                "deaths": dict(self.deaths),
                "recovered": dict(self.recovered),
            },
        }

    def _point(self, date_key: str, label: str) -> ChartPoint:
        return ChartPoint(
            date=label,
            cases=self.cases.get(date_key) or 0,
            deaths=self.deaths.get(date_key) or 0,
            recovered=self.recovered.get(date_key) or 0,
        )

    def chart_points(self) -> List[ChartPoint]:
        return [self._point(date_key, short_date(date_key)) for date_key in self.cases]

    def latest(self) -> Optional[ChartPoint]:
        if not self.cases:
            return None
        last_key = list(self.cases)[-1]
        return self._point(last_key, last_key)

    def total_cases(self) -> int:
        latest = self.latest()
        return latest.cases if latest else 0


def sample_points(points: List[ChartPoint], max_points: int = 30) -> List[ChartPoint]:
    """Keep every ``ceil(n / max_points)``-th point, starting with the first."""
    if max_points <= 0 or len(points) <= max_points:
        return list(points)
    step = math.ceil(len(points) / max_points)
    return points[::step]
