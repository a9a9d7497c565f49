from __future__ import annotations
from dataclasses import dataclass, field, asdict, replace as _replace
from typing import Any, Dict, Mapping, Tuple
import math


@dataclass(frozen=True)
class Scenario:
    name: str
    perf_uplift: float   # proxy reputation metric, display only
    sales_uplift: float  # incremental sales as fraction of revenue (e.g., 0.0025)


@dataclass(frozen=True)
class Inputs:
    # Budget waterfall
    revenue: float
    marketing_pct: float     # of revenue
    content_pct: float       # of marketing budget
    demo_alloc_pct: float    # of content budget, spent on the internal capability
    replacement_pct: float   # of that allocation replaced by the new investment

    # Investment and margin
    investment_year1: float
    gross_margin: float  # 0..1

    scenarios: Tuple[Scenario, ...] = field(default_factory=tuple)

    def replace(self, **changes: Any) -> "Inputs":
        return _replace(self, **changes)


DEFAULT_SCENARIOS: Tuple[Scenario, ...] = (
    Scenario(name="A", perf_uplift=0.05, sales_uplift=0.0025),
    Scenario(name="B", perf_uplift=0.10, sales_uplift=0.005),
    Scenario(name="C", perf_uplift=0.15, sales_uplift=0.01),
)

DEFAULT_INPUTS = Inputs(
    revenue=14_000_000.0,
    marketing_pct=0.07,
    content_pct=0.20,
    demo_alloc_pct=0.50,
    replacement_pct=0.60,
    investment_year1=50_000.0,
    gross_margin=0.40,
    scenarios=DEFAULT_SCENARIOS,
)

# wire name -> field name
FIELD_ALIASES: Dict[str, str] = {
    "revenue": "revenue",
    "marketingPct": "marketing_pct",
    "contentPct": "content_pct",
    "demoAllocPct": "demo_alloc_pct",
    "replacementPct": "replacement_pct",
    "investmentYear1": "investment_year1",
    "grossMargin": "gross_margin",
}
SCENARIO_ALIASES: Dict[str, str] = {
    "name": "name",
    "perfUplift": "perf_uplift",
    "salesUplift": "sales_uplift",
}
NUMERIC_FIELDS: Tuple[str, ...] = tuple(FIELD_ALIASES.values())


def _to_float(key: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number") from None


def _normalize(data: Mapping[str, Any], aliases: Dict[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    known = set(aliases.values())
    for k, v in data.items():
        name = aliases.get(k, k)
        if name in known:
            out[name] = v
    return out


def scenario_from_dict(data: Mapping[str, Any]) -> Scenario:
    if not isinstance(data, Mapping):
        raise ValueError("scenario must be an object")
    d = _normalize(data, SCENARIO_ALIASES)
    name = d.get("name")
    if name is None or str(name).strip() == "":
        raise ValueError("scenario name is required")
    return Scenario(
        name=str(name),
        perf_uplift=_to_float("perf_uplift", d.get("perf_uplift", 0.0)),
        sales_uplift=_to_float("sales_uplift", d.get("sales_uplift", 0.0)),
    )


def inputs_from_dict(data: Mapping[str, Any], base: Inputs = DEFAULT_INPUTS) -> Inputs:
    """Build Inputs from a JSON-like mapping.

    Accepts camelCase (``marketingPct``) or snake_case (``marketing_pct``) keys.
    Missing keys keep the value from ``base``; a ``scenarios`` list replaces
    the base scenarios entirely. Unknown keys are ignored.
    """
    d = _normalize(data, {**FIELD_ALIASES, "scenarios": "scenarios"})
    changes: Dict[str, Any] = {}
    for name in NUMERIC_FIELDS:
        if name in d:
            changes[name] = _to_float(name, d[name])
    if "scenarios" in d:
        raw = d["scenarios"]
        if not isinstance(raw, (list, tuple)):
            raise ValueError("scenarios must be a list")
        changes["scenarios"] = tuple(scenario_from_dict(s) for s in raw)
    return base.replace(**changes)


def inputs_to_dict(inputs: Inputs) -> Dict[str, Any]:
    d = asdict(inputs)
    d["scenarios"] = [asdict(s) for s in inputs.scenarios]
    return d


def validate_inputs(i: Inputs) -> None:
    """Reject inputs the calculator should never be handed.

    Fractions above 100% are allowed and propagate arithmetically.
    """
    for name in NUMERIC_FIELDS:
        v = getattr(i, name)
        if not math.isfinite(v):
            raise ValueError(f"{name} must be a finite number")
        if v < 0:
            raise ValueError(f"{name} must be non-negative")
    seen = set()
    for s in i.scenarios:
        if not s.name.strip():
            raise ValueError("scenario name is required")
        if s.name in seen:
            raise ValueError(f"duplicate scenario name: {s.name}")
        seen.add(s.name)
        for name, v in (("perf_uplift", s.perf_uplift), ("sales_uplift", s.sales_uplift)):
            if not math.isfinite(v):
                raise ValueError(f"scenario {s.name}: {name} must be a finite number")
            if v < 0:
                raise ValueError(f"scenario {s.name}: {name} must be non-negative")
