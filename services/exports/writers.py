from __future__ import annotations
from typing import List, Dict, Any, Iterable
from dataclasses import asdict
import csv
import io

from services.roi.assumptions import Inputs
from services.roi.engine import Results, is_unbounded

SCHEMAS = {
    "inputs": [
        "revenue","marketing_pct","content_pct","demo_alloc_pct","replacement_pct","investment_year1","gross_margin"
    ],
    "core_results": [
        "marketing_budget","content_budget","demo_budget_year1","replaced_production","demo_budget_year2",
        "annual_savings","reduction_pct","payback_months_base","roi_2y_base"
    ],
    "scenarios": [
        "name","perf_uplift","sales_uplift","incremental_sales","incremental_profit","roi_2y_total","payback_months_upside"
    ],
}


def _cell(v: Any) -> Any:
    # Unbounded ratios are written as empty cells
    if isinstance(v, float) and is_unbounded(v):
        return None
    return v


def write_csv(rows: Iterable[Dict[str, Any]], columns: List[str]) -> str:
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=columns, extrasaction="ignore")
    w.writeheader()
    for r in rows:
        w.writerow({k: _cell(r.get(k)) for k in columns})
    return buf.getvalue()


def write_inputs(inputs: Inputs) -> str:
    return write_csv([asdict(inputs)], SCHEMAS["inputs"])


def write_core_results(results: Results) -> str:
    return write_csv([asdict(results)], SCHEMAS["core_results"])


def write_scenarios(results: Results) -> str:
    return write_csv((asdict(s) for s in results.scenarios), SCHEMAS["scenarios"])
