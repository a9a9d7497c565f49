from __future__ import annotations
from typing import Any, Dict, List, Mapping
import logging
import math
import re

from services.formatting.locales import LocaleFormat
from services.roi.assumptions import DEFAULT_INPUTS, FIELD_ALIASES, SCENARIO_ALIASES, Inputs, Scenario

logger = logging.getLogger(__name__)

# Entered as currency; every other top-level field is a percentage
AMOUNT_FIELDS = {"revenue", "investment_year1"}

_SCENARIO_KEY = re.compile(r"^scenarios\.(\d+)\.(\w+)$")


def parse_amount(text: Any, locale: LocaleFormat, fallback: float) -> float:
    """Currency amount typed by a user: whole units, never negative."""
    n = locale.parse_number(text)
    if not math.isfinite(n):
        logger.debug("invalid amount %r, keeping %s", text, fallback)
        n = fallback
    return float(max(0, int(math.floor(n + 0.5))))


def parse_percent(text: Any, locale: LocaleFormat, fallback: float) -> float:
    """Percentage typed as e.g. "7" or "0,25"; returns a fraction, never negative.

    ``fallback`` is a fraction and is returned unchanged on invalid text.
    """
    n = locale.parse_number(text)
    if not math.isfinite(n):
        logger.debug("invalid percent %r, keeping %s", text, fallback)
        return fallback
    return max(0.0, n) / 100


def _field_name(key: str, aliases: Mapping[str, str]) -> str:
    name = aliases.get(key, key)
    if name not in aliases.values():
        raise ValueError(f"unknown field: {key}")
    return name


def collect_inputs(
    fields: Mapping[str, Any],
    locale: LocaleFormat,
    previous: Inputs = DEFAULT_INPUTS,
) -> Inputs:
    """Apply raw form text onto ``previous`` and return the new Inputs.

    Keys are ``revenue``, ``marketingPct``, ... (snake_case accepted) and
    ``scenarios.<index>.perfUplift`` / ``scenarios.<index>.salesUplift`` /
    ``scenarios.<index>.name``. Unparseable text keeps the previous value;
    unknown keys and out-of-range scenario indexes raise ValueError.
    """
    changes: Dict[str, float] = {}
    scenarios: List[Scenario] = list(previous.scenarios)

    for key, text in fields.items():
        m = _SCENARIO_KEY.match(key)
        if m:
            idx = int(m.group(1))
            if idx >= len(scenarios):
                raise ValueError(f"no scenario at index {idx}")
            name = _field_name(m.group(2), SCENARIO_ALIASES)
            s = scenarios[idx]
            if name == "name":
                value = str(text).strip()
                scenarios[idx] = Scenario(value or s.name, s.perf_uplift, s.sales_uplift)
            elif name == "perf_uplift":
                scenarios[idx] = Scenario(s.name, parse_percent(text, locale, s.perf_uplift), s.sales_uplift)
            else:
                scenarios[idx] = Scenario(s.name, s.perf_uplift, parse_percent(text, locale, s.sales_uplift))
            continue

        name = _field_name(key, FIELD_ALIASES)
        current = getattr(previous, name)
        if name in AMOUNT_FIELDS:
            changes[name] = parse_amount(text, locale, current)
        else:
            changes[name] = parse_percent(text, locale, current)

    return previous.replace(scenarios=tuple(scenarios), **changes)
