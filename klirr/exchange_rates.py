"""Exchange rates for expenses, fetched from a public API and cached on disk."""

from __future__ import annotations

import datetime as _dt
import decimal
import json
import logging
import os
import urllib.error
import urllib.request
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Protocol

from klirr.storage import (
    DATA_FILE_NAME_CACHED_RATES,
    StorageError,
    data_dir,
    load_data,
    path_to_data_file,
    save_to_disk,
)

logger = logging.getLogger(__name__)

FRANKFURTER_API = "https://api.frankfurter.app"
_HTTP_TIMEOUT_SECONDS = 30

RateFetcher = Callable[[_dt.date, str, str], Decimal]


class ExchangeRateError(Exception):
    """An exchange rate could not be fetched or parsed."""


class _Expense(Protocol):
    transaction_date: _dt.date
    currency: str


@dataclass(frozen=True)
class ExchangeRates:
    """Rates from source currencies into one target currency."""

    target_currency: str
    rates: dict[str, Decimal] = field(default_factory=dict)


def format_url(date: _dt.date, from_currency: str, to_currency: str) -> str:
    """The API URL for the rate from ``from_currency`` to ``to_currency`` on ``date``."""
    return f"{FRANKFURTER_API}/{date.isoformat()}?from={from_currency}&to={to_currency}"


def parse_rates_response(text: str) -> dict[str, Decimal]:
    """Extract the ``rates`` mapping from an API response body."""
    try:
        payload = json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as error:
        raise ExchangeRateError(f"Parse JSON: {error}") from error
    rates = payload.get("rates") if isinstance(payload, Mapping) else None
    if not isinstance(rates, Mapping):
        raise ExchangeRateError("Parse JSON: missing field `rates`")
    try:
        return {str(currency): Decimal(str(rate)) for currency, rate in rates.items()}
    except decimal.InvalidOperation as error:
        raise ExchangeRateError(f"Parse JSON: invalid rate: {error}") from error


def http_fetch(url: str) -> str:
    """Fetch ``url`` with a blocking GET and return the body as text."""
    try:
        with urllib.request.urlopen(url, timeout=_HTTP_TIMEOUT_SECONDS) as response:
            body = response.read()
    except (urllib.error.URLError, OSError) as error:
        raise ExchangeRateError(f"Fetch exchange rate {url}: {error}") from error
    return body.decode("utf-8")


def get_exchange_rate(
    date: _dt.date,
    from_currency: str,
    to_currency: str,
    fetcher: Callable[[str], str] = http_fetch,
) -> Decimal:
    """The rate converting ``from_currency`` into ``to_currency`` on ``date``.

    Identical currencies give a rate of one without any request.
    """
    if from_currency == to_currency:
        return Decimal(1)
    logger.debug("Fetching %s/%s@%s rate.", from_currency, to_currency, date)
    rates = parse_rates_response(fetcher(format_url(date, from_currency, to_currency)))
    try:
        return rates[to_currency]
    except KeyError:
        raise ExchangeRateError(
            f"Found no exchange rate for {to_currency} with base {from_currency}"
        ) from None


@dataclass
class CachedRates:
    """Exchange rates indexed by date, source currency and target currency."""

    rates: dict[_dt.date, dict[str, dict[str, Decimal]]] = field(default_factory=dict)

    def rates_for_day_and_from_currency(
        self, date: _dt.date, from_currency: str
    ) -> dict[str, Decimal]:
        """The mutable target-to-rate mapping for a day and source currency."""
        return self.rates.setdefault(date, {}).setdefault(from_currency, {})

    def load_else_fetch(
        self,
        date: _dt.date,
        from_currency: str,
        to_currency: str,
        fetch: RateFetcher,
    ) -> tuple[Decimal, bool]:
        """Return the cached rate, or fetch and cache it.

        The second value is true when the rate was newly fetched.
        """
        day_rates = self.rates_for_day_and_from_currency(date, from_currency)
        cached = day_rates.get(to_currency)
        if cached is not None:
            return cached, False
        rate = fetch(date, from_currency, to_currency)
        day_rates[to_currency] = rate
        return rate, True

    def to_dict(self) -> dict[str, dict[str, dict[str, str]]]:
        """A JSON-compatible representation."""
        return {
            date.isoformat(): {
                source: {target: str(rate) for target, rate in targets.items()}
                for source, targets in by_source.items()
            }
            for date, by_source in self.rates.items()
        }

    @classmethod
    def from_dict(cls, data: Any) -> CachedRates:
        """Build from the representation made by ``to_dict``.

        Raises ValueError if ``data`` does not have that shape.
        """
        if not isinstance(data, Mapping):
            raise ValueError("Cached rates must be a mapping")
        rates: dict[_dt.date, dict[str, dict[str, Decimal]]] = {}
        try:
            for day, by_source in data.items():
                if not isinstance(by_source, Mapping):
                    raise ValueError(f"Rates for {day} must be a mapping")
                parsed_sources: dict[str, dict[str, Decimal]] = {}
                for source, targets in by_source.items():
                    if not isinstance(targets, Mapping):
                        raise ValueError(f"Rates from {source} must be a mapping")
                    parsed_sources[str(source)] = {
                        str(target): Decimal(str(rate)) for target, rate in targets.items()
                    }
                rates[_dt.date.fromisoformat(str(day))] = parsed_sources
        except decimal.InvalidOperation as error:
            raise ValueError(f"Invalid cached rate: {error}") from error
        return cls(rates)


def _fetch_rate_over_network(
    date: _dt.date, from_currency: str, to_currency: str
) -> Decimal:
    return get_exchange_rate(date, from_currency, to_currency)


class ExchangeRatesFetcher:
    """Fetches exchange rates, caching them in a file in ``path_to_cache``."""

    def __init__(
        self,
        path_to_cache: str | os.PathLike[str] | None = None,
        fetch_rate: RateFetcher = _fetch_rate_over_network,
    ) -> None:
        self.path_to_cache = Path(path_to_cache) if path_to_cache is not None else data_dir()
        self.fetch_rate = fetch_rate

    @property
    def cache_file(self) -> Path:
        return path_to_data_file(self.path_to_cache, DATA_FILE_NAME_CACHED_RATES)

    def load_cache_else_new(self) -> CachedRates:
        """The cached rates, or an empty cache if none can be read."""
        try:
            return CachedRates.from_dict(
                load_data(self.path_to_cache, DATA_FILE_NAME_CACHED_RATES)
            )
        except (StorageError, ValueError):
            logger.debug("No cached exchange rates found, fetching new rates.")
            return CachedRates()

    def save_cache(self, rates: CachedRates) -> None:
        """Write ``rates`` to the cache file."""
        save_to_disk(rates, self.cache_file)

    def update_cache_if_needed(self, rates: CachedRates, fetched_new_rates: bool) -> None:
        """Save ``rates`` if new ones were fetched; failures are only logged."""
        if not fetched_new_rates:
            logger.debug("No new rates fetched, used only cached rates.")
            return
        logger.debug("Fetched new rates, updating cache: %s", self.path_to_cache)
        try:
            self.save_cache(rates)
        except StorageError as error:
            logger.warning(
                "Failed to cache exchange rates: %s (this has no affect on PDF generation.)",
                error,
            )
        else:
            logger.debug("Cached exchange rates updated.")

    def fetch_for_expenses(
        self, target_currency: str, expenses: Iterable[_Expense]
    ) -> ExchangeRates:
        """Rates into ``target_currency`` for each expense's currency and date.

        Cached rates are used where present; others are fetched and cached.
        """
        cache = self.load_cache_else_new()
        fetched_new_rates = False
        rates: dict[str, Decimal] = {}
        for expense in expenses:
            rate, is_new = cache.load_else_fetch(
                expense.transaction_date, expense.currency, target_currency, self.fetch_rate
            )
            fetched_new_rates |= is_new
            rates[expense.currency] = rate
        logger.debug("Fetched exchange rates for #%d expenses.", len(rates))
        self.update_cache_if_needed(cache, fetched_new_rates)
        return ExchangeRates(target_currency=target_currency, rates=rates)