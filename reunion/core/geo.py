"""
Country, state and city lookups.

Countries and their first-level subdivisions come from ISO 3166 via
pycountry; cities come from the GeoNames extract shipped with
geonamescache and are attached to the subdivision whose code matches the
city's admin1 code. A JSON file named by ``GEO_DATASET_PATH`` replaces the
built-in data entirely.

The dataset is built once, on first use, into tuples and never mutated, so
concurrent requests share it freely. Names are matched exactly and
case-sensitively; an unknown name yields an empty list rather than an error.
"""
import json
from collections import defaultdict
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Set, Tuple

import pycountry
from geonamescache import GeonamesCache

from reunion.core.config import settings
from reunion.core.logging import locations_logger

@dataclass(frozen=True)
class State:
    name: str
    iso_code: str
    cities: Tuple[str, ...]

@dataclass(frozen=True)
class Country:
    name: str
    iso_code: str
    states: Tuple[State, ...]

@dataclass(frozen=True)
class GeoDataset:
    countries: Tuple[Country, ...]
    _index: Dict[str, Country] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_index", {c.name: c for c in self.countries})

    def country(self, name: str) -> Country | None:
        return self._index.get(name)

def parse_dataset(raw: dict) -> GeoDataset:
    countries = tuple(
        Country(
            name=country["name"],
            iso_code=country.get("isoCode", ""),
            states=tuple(
                State(
                    name=state["name"],
                    iso_code=state.get("isoCode", ""),
                    cities=tuple(state.get("cities", ())),
                )
                for state in country.get("states", ())
            ),
        )
        for country in raw.get("countries", ())
    )
    return GeoDataset(countries=countries)

def build_dataset(min_city_population: int | None = None) -> GeoDataset:
    """Assemble the dataset from ISO 3166 and GeoNames."""
    population = min_city_population or settings.GEO_MIN_CITY_POPULATION
    cities: Dict[Tuple[str, str], Set[str]] = defaultdict(set)
    for city in GeonamesCache(min_city_population=population).get_cities().values():
        region = city.get("admin1code")
        if region:
            cities[(city["countrycode"], region)].add(city["name"])

    states: Dict[str, List[State]] = defaultdict(list)
    for subdivision in pycountry.subdivisions:
        # First-level divisions only
        if getattr(subdivision, "parent_code", None):
            continue
        country_code, _, region = subdivision.code.partition("-")
        states[country_code].append(State(
            name=subdivision.name,
            iso_code=subdivision.code,
            cities=tuple(sorted(cities.get((country_code, region), ()))),
        ))

    countries = tuple(
        Country(name=country.name, iso_code=country.alpha_2, states=tuple(states.get(country.alpha_2, ())))
        for country in pycountry.countries
    )
    return GeoDataset(countries=countries)

def load_dataset(path: str | Path) -> GeoDataset:
    with Path(path).open(encoding="utf-8") as fh:
        return parse_dataset(json.load(fh))

@lru_cache(maxsize=1)
def get_dataset(path: str | None = None) -> GeoDataset:
    source = path or settings.GEO_DATASET_PATH
    dataset = load_dataset(source) if source else build_dataset()
    locations_logger.info(
        "Geographic dataset loaded",
        extra={"source": source or "pycountry+geonamescache", "countries": len(dataset.countries)}
    )
    return dataset

def list_countries(dataset: GeoDataset | None = None) -> List[str]:
    dataset = dataset or get_dataset()
    return sorted(c.name for c in dataset.countries)

def list_states(country_name: str, dataset: GeoDataset | None = None) -> List[str]:
    dataset = dataset or get_dataset()
    country = dataset.country(country_name)
    if country is None:
        return []
    return sorted({s.name for s in country.states})

def list_cities(country_name: str, state_name: str, dataset: GeoDataset | None = None) -> List[str]:
    dataset = dataset or get_dataset()
    country = dataset.country(country_name)
    if country is None:
        return []
    state = next((s for s in country.states if s.name == state_name), None)
    if state is None:
        return []
    return sorted(set(state.cities))
