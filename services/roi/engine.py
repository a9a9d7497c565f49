from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
import math

from services.roi.assumptions import Inputs, Scenario

# Ratio with a zero denominator
INFINITE = math.inf


def is_unbounded(x: float) -> bool:
    return x == INFINITE


@dataclass(frozen=True)
class ScenarioResult:
    name: str
    perf_uplift: float   # passthrough, never used in the math
    sales_uplift: float  # passthrough
    incremental_sales: float
    incremental_profit: float
    roi_2y_total: float
    payback_months_upside: float


@dataclass(frozen=True)
class Results:
    marketing_budget: float
    content_budget: float
    demo_budget_year1: float
    replaced_production: float
    demo_budget_year2: float
    annual_savings: float
    reduction_pct: float
    payback_months_base: float
    roi_2y_base: float
    scenarios: Tuple[ScenarioResult, ...]


def _scenario(s: Scenario, revenue: float, gross_margin: float,
              annual_savings: float, investment: float) -> ScenarioResult:
    incremental_sales = revenue * s.sales_uplift
    incremental_profit = incremental_sales * gross_margin

    roi_2y_total = INFINITE if investment == 0 else (
        (annual_savings + incremental_profit - investment) / investment
    )
    upside = annual_savings + incremental_profit
    payback_months_upside = INFINITE if upside == 0 else (investment / upside) * 12

    return ScenarioResult(
        name=s.name,
        perf_uplift=s.perf_uplift,
        sales_uplift=s.sales_uplift,
        incremental_sales=incremental_sales,
        incremental_profit=incremental_profit,
        roi_2y_total=roi_2y_total,
        payback_months_upside=payback_months_upside,
    )


def compute(i: Inputs) -> Results:
    """Budget waterfall, savings and 2-year ROI, then the upside scenarios.

    revenue -> marketing -> content -> capability budget; the replaced share
    of the capability budget is the run-rate saving. Each scenario adds
    ``revenue * sales_uplift * gross_margin`` of profit on top of the same
    base saving. Zero denominators yield INFINITE instead of raising.
    Inputs are assumed finite (see validate_inputs); nothing is clamped.
    """
    marketing_budget = i.revenue * i.marketing_pct
    content_budget = marketing_budget * i.content_pct

    demo_budget_year1 = content_budget * i.demo_alloc_pct
    replaced_production = demo_budget_year1 * i.replacement_pct

    demo_budget_year2 = demo_budget_year1 - replaced_production
    # Same value as replaced_production; keep the two-step form
    annual_savings = demo_budget_year1 - demo_budget_year2

    reduction_pct = 0.0 if demo_budget_year1 == 0 else (
        (demo_budget_year1 - demo_budget_year2) / demo_budget_year1
    )
    investment = i.investment_year1
    payback_months_base = INFINITE if replaced_production == 0 else (investment / replaced_production) * 12
    roi_2y_base = INFINITE if investment == 0 else (annual_savings - investment) / investment

    scenarios = tuple(
        _scenario(s, i.revenue, i.gross_margin, annual_savings, investment)
        for s in i.scenarios
    )

    return Results(
        marketing_budget=marketing_budget,
        content_budget=content_budget,
        demo_budget_year1=demo_budget_year1,
        replaced_production=replaced_production,
        demo_budget_year2=demo_budget_year2,
        annual_savings=annual_savings,
        reduction_pct=reduction_pct,
        payback_months_base=payback_months_base,
        roi_2y_base=roi_2y_base,
        scenarios=scenarios,
    )


def _json_num(x: float) -> Optional[float]:
    return None if is_unbounded(x) else x


def results_to_dict(r: Results) -> Dict[str, Any]:
    """JSON-safe view with camelCase keys; the INFINITE sentinel becomes None."""
    return {
        "marketingBudget": r.marketing_budget,
        "contentBudget": r.content_budget,
        "demoBudgetYear1": r.demo_budget_year1,
        "replacedProduction": r.replaced_production,
        "demoBudgetYear2": r.demo_budget_year2,
        "annualSavings": r.annual_savings,
        "reductionPct": r.reduction_pct,
        "paybackMonthsBase": _json_num(r.payback_months_base),
        "roi2yBase": _json_num(r.roi_2y_base),
        "scenarioResults": [
            {
                "name": s.name,
                "perfUplift": s.perf_uplift,
                "salesUplift": s.sales_uplift,
                "incrementalSales": s.incremental_sales,
                "incrementalProfit": s.incremental_profit,
                "roi2yTotal": _json_num(s.roi_2y_total),
                "paybackMonthsUpside": _json_num(s.payback_months_upside),
            }
            for s in r.scenarios
        ],
    }
