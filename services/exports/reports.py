from __future__ import annotations
from typing import List

from services.formatting.locales import CORE_KINDS, SCENARIO_KINDS, LocaleFormat
from services.roi.assumptions import Inputs
from services.roi.engine import Results

_AMOUNTS = ("revenue", "investment_year1")
_PERCENTS = ("marketing_pct", "content_pct", "demo_alloc_pct", "replacement_pct", "gross_margin")


def assumptions_md(inputs: Inputs, locale: LocaleFormat) -> str:
    lines = [f"# {locale.label('assumptions')}", ""]
    for k in _AMOUNTS:
        lines.append(f"- {locale.label(k)}: {locale.money(getattr(inputs, k))}")
    for k in _PERCENTS:
        lines.append(f"- {locale.label(k)}: {locale.pct(getattr(inputs, k), 2)}")
    for s in inputs.scenarios:
        lines.append(f"\n## {locale.label('scenario')} {s.name}")
        lines.append(f"- {locale.label('perf_uplift')}: {locale.pct(s.perf_uplift, 2)} ({locale.label('proxy_note')})")
        lines.append(f"- {locale.label('sales_uplift')}: {locale.pct(s.sales_uplift, 2)}")
    return "\n".join(lines) + "\n"


def results_md(results: Results, locale: LocaleFormat, warnings: List[str] | None = None) -> str:
    lines = [f"# {locale.label('core_results')}", ""]
    for key, kind in CORE_KINDS.items():
        lines.append(f"- {locale.label(key)}: {locale.metric(getattr(results, key), kind)}")

    if results.scenarios:
        cols = ["incremental_sales", "incremental_profit", "roi_2y_total", "payback_months_upside"]
        lines.append(f"\n## {locale.label('upside_scenarios')}")
        lines.append("")
        lines.append("| " + " | ".join([locale.label("scenario")] + [locale.label(c) for c in cols]) + " |")
        lines.append("|---" + "|---:" * len(cols) + "|")
        for s in results.scenarios:
            cells = [locale.metric(getattr(s, c), SCENARIO_KINDS[c]) for c in cols]
            lines.append("| " + " | ".join([s.name] + cells) + " |")

    if warnings:
        lines.append(f"\n## {locale.label('warnings')}")
        for w in warnings:
            lines.append(f"- {w}")
    return "\n".join(lines) + "\n"
