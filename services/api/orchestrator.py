from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping
import logging

from services.config.env import get_locale_config
from services.formatting.locales import LocaleFormat, get_locale
from services.intake.form import collect_inputs
from services.roi.assumptions import DEFAULT_INPUTS, Inputs, inputs_from_dict, inputs_to_dict, validate_inputs
from services.roi.engine import Results, compute, is_unbounded, results_to_dict
from services.exports.writers import write_core_results, write_inputs, write_scenarios
from services.exports.reports import assumptions_md, results_md

logger = logging.getLogger(__name__)

ARTIFACT_NAMES = ("inputs.csv", "results.csv", "scenarios.csv", "assumptions.md", "results.md")


@dataclass
class Calculation:
    inputs: Inputs
    locale: LocaleFormat
    results: Results
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "locale": self.locale.code,
            "inputs": inputs_to_dict(self.inputs),
            "results": results_to_dict(self.results),
            "display": self.locale.render_results(self.results),
            "warnings": self.warnings,
        }

    def artifacts(self) -> Dict[str, str]:
        # filename -> content
        return {
            "inputs.csv": write_inputs(self.inputs),
            "results.csv": write_core_results(self.results),
            "scenarios.csv": write_scenarios(self.results),
            "assumptions.md": assumptions_md(self.inputs, self.locale),
            "results.md": results_md(self.results, self.locale, warnings=self.warnings),
        }


def _warnings(i: Inputs, r: Results) -> List[str]:
    out: List[str] = []
    for name in ("marketing_pct", "content_pct", "demo_alloc_pct", "replacement_pct", "gross_margin"):
        if getattr(i, name) > 1:
            out.append(f"{name} is above 100%")
    if is_unbounded(r.roi_2y_base):
        out.append("investment_year1 is zero; ROI is unbounded")
    if is_unbounded(r.payback_months_base):
        out.append("no production is replaced; base payback is unbounded")
    return out


def calculate(payload: Mapping[str, Any], base: Inputs = DEFAULT_INPUTS) -> Calculation:
    """Validate a request body, compute and bundle the results.

    Raises ValueError on invalid inputs and KeyError on an unknown locale.
    """
    locale = get_locale(payload.get("locale") or get_locale_config().default_locale)
    raw = payload.get("inputs", payload)
    if not isinstance(raw, Mapping):
        raise ValueError("inputs must be an object")
    inputs = inputs_from_dict(raw, base=base)
    validate_inputs(inputs)
    return _finish(inputs, locale)


def calculate_form(payload: Mapping[str, Any], base: Inputs = DEFAULT_INPUTS) -> Calculation:
    """Same as calculate() but for raw form text typed in the request's locale.

    ``fields`` maps field names to text (``{"revenue": "14.000.000"}``);
    unparseable entries keep the value from ``previous`` (or ``base``).
    """
    locale = get_locale(payload.get("locale") or get_locale_config().default_locale)
    fields = payload.get("fields") or {}
    if not isinstance(fields, Mapping):
        raise ValueError("fields must be an object")
    previous = payload.get("previous")
    if previous is not None:
        if not isinstance(previous, Mapping):
            raise ValueError("previous must be an object")
        base = inputs_from_dict(previous, base=base)
    inputs = collect_inputs(fields, locale, previous=base)
    validate_inputs(inputs)
    return _finish(inputs, locale)


def _finish(inputs: Inputs, locale: LocaleFormat) -> Calculation:
    results = compute(inputs)
    calc = Calculation(inputs=inputs, locale=locale, results=results, warnings=_warnings(inputs, results))
    logger.info("calculated roi for %d scenario(s), locale=%s", len(inputs.scenarios), locale.code)
    return calc
