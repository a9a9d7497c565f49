from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping
import math
import re

from services.roi.engine import Results, ScenarioResult, is_unbounded

DASH = "—"


LABELS_EN: Dict[str, str] = {
    # inputs
    "revenue": "Company Revenue",
    "investment_year1": "AI System Investment (Year 1)",
    "marketing_pct": "Marketing Budget (% of revenue)",
    "content_pct": "Content Marketing (% of marketing budget)",
    "demo_alloc_pct": "Video Demos Allocation (internal)",
    "replacement_pct": "Cost reduction in demo production (%)",
    "gross_margin": "Gross Margin (assumption)",
    "perf_uplift": "Performance uplift (proxy reputation)",
    "sales_uplift": "Sales uplift (as % of revenue)",
    # core results
    "marketing_budget": "Marketing Budget",
    "content_budget": "Content Marketing Budget",
    "demo_budget_year1": "Year 1 — Video Demos Budget",
    "replaced_production": "Replaced production",
    "demo_budget_year2": "Year 2 — Video Demos Budget",
    "annual_savings": "Annual savings (run-rate)",
    "reduction_pct": "Cost reduction (Video Demo Budget)",
    "payback_months_base": "Payback (months) — base savings",
    "roi_2y_base": "2-Year ROI (Base: cost savings)",
    # scenarios
    "scenario": "Scenario",
    "incremental_sales": "Incremental sales",
    "incremental_profit": "Incremental profit",
    "roi_2y_total": "2-Year ROI (Total)",
    "payback_months_upside": "Payback (months)",
    # sections
    "assumptions": "Assumptions",
    "core_results": "Core results",
    "upside_scenarios": "Upside scenarios",
    "warnings": "Warnings",
    "proxy_note": "Proxy metric (not in ROI math)",
}

LABELS_ES: Dict[str, str] = {
    "revenue": "Ingresos de la empresa",
    "investment_year1": "Inversión motor creativo IA (Año 1)",
    "marketing_pct": "Presupuesto de marketing (% de ingresos)",
    "content_pct": "Content marketing (% del presupuesto de marketing)",
    "demo_alloc_pct": "Asignación a video y fotografía (interna)",
    "replacement_pct": "Reemplazo de recursos de producción (interno) (%)",
    "gross_margin": "Margen bruto (supuesto)",
    "perf_uplift": "Mejora de performance (proxy reputación)",
    "sales_uplift": "Incremento de ventas (% de ingresos)",
    "marketing_budget": "Presupuesto de marketing",
    "content_budget": "Presupuesto de content marketing",
    "demo_budget_year1": "Año 1 - Asignación a video y fotografía",
    "replaced_production": "Producción reemplazada",
    "demo_budget_year2": "Año 2 - Asignación a video y fotografía",
    "annual_savings": "Ahorro anual (run-rate)",
    "reduction_pct": "Reducción de costo (video y fotografía)",
    "payback_months_base": "Recuperación (meses) — ahorro base",
    "roi_2y_base": "ROI a 2 años (Base: ahorro de costos)",
    "scenario": "Escenario",
    "incremental_sales": "Ventas incrementales",
    "incremental_profit": "Utilidad incremental",
    "roi_2y_total": "ROI 2 años (total)",
    "payback_months_upside": "Recuperación (meses)",
    "assumptions": "Supuestos",
    "core_results": "Resultados",
    "upside_scenarios": "Escenarios (upside)",
    "warnings": "Advertencias",
    "proxy_note": "Métrica proxy (no entra en el cálculo de ROI)",
}

# How each result field is displayed
CORE_KINDS: Dict[str, str] = {
    "marketing_budget": "money",
    "content_budget": "money",
    "demo_budget_year1": "money",
    "replaced_production": "money",
    "demo_budget_year2": "money",
    "annual_savings": "money",
    "reduction_pct": "pct",
    "payback_months_base": "months",
    "roi_2y_base": "pct",
}
SCENARIO_KINDS: Dict[str, str] = {
    "perf_uplift": "pct2",
    "sales_uplift": "pct2",
    "incremental_sales": "money",
    "incremental_profit": "money",
    "roi_2y_total": "pct",
    "payback_months_upside": "months",
}


def _round_half_up(n: float) -> int:
    return int(math.floor(n + 0.5))


@dataclass(frozen=True)
class LocaleFormat:
    """Number parsing and display rules for one locale.

    The same Results value is rendered by every locale; only strings differ.
    """
    code: str
    thousands_sep: str
    decimal_sep: str
    min_grouping_digits: int   # integer digits needed before grouping kicks in
    group_fixed: bool          # whether pct/num output is grouped too
    currency_prefix: str = "$"
    dash: str = DASH
    labels: Mapping[str, str] = field(default_factory=dict)

    def label(self, key: str) -> str:
        return self.labels.get(key, key)

    # Parsing

    def parse_number(self, text: Any) -> float:
        s = re.sub(r"\s", "", str(text))
        if not s:
            return math.nan
        s = s.replace(self.thousands_sep, "").replace(self.decimal_sep, ".")
        try:
            n = float(s)
        except ValueError:
            return math.nan
        return n if math.isfinite(n) else math.nan

    # Formatting

    def _group(self, digits: str) -> str:
        if len(digits) < self.min_grouping_digits:
            return digits
        parts: List[str] = []
        while len(digits) > 3:
            parts.insert(0, digits[-3:])
            digits = digits[:-3]
        parts.insert(0, digits)
        return self.thousands_sep.join(parts)

    def _fixed(self, n: float, digits: int, grouped: bool) -> str:
        s = f"{abs(n):.{digits}f}"
        neg = n < 0 and float(s) != 0
        whole, _, frac = s.partition(".")
        if grouped:
            whole = self._group(whole)
        out = whole + (self.decimal_sep + frac if frac else "")
        return f"-{out}" if neg else out

    def format_int(self, n: float) -> str:
        if not math.isfinite(n):
            return ""
        v = _round_half_up(n)
        body = self._group(str(abs(v)))
        return f"-{body}" if v < 0 else body

    def money(self, n: float) -> str:
        if not math.isfinite(n):
            return f"{self.currency_prefix}0"
        v = _round_half_up(n)
        body = self._group(str(abs(v)))
        return f"-{self.currency_prefix}{body}" if v < 0 else f"{self.currency_prefix}{body}"

    def pct(self, n: float, digits: int = 0) -> str:
        if not math.isfinite(n):
            return "0%"
        return f"{self._fixed(n * 100, digits, self.group_fixed)}%"

    def num(self, n: float, digits: int = 2) -> str:
        if not math.isfinite(n):
            return "0"
        return self._fixed(n, digits, self.group_fixed)

    def metric(self, n: float, kind: str) -> str:
        if is_unbounded(n):
            return self.dash
        if kind == "money":
            return self.money(n)
        if kind == "pct":
            return self.pct(n, 0)
        if kind == "pct2":
            return self.pct(n, 2)
        if kind == "months":
            return self.num(n, 1)
        raise ValueError(f"unknown metric kind: {kind}")

    def render_scenario(self, s: ScenarioResult) -> Dict[str, str]:
        row = {"name": s.name}
        for key, kind in SCENARIO_KINDS.items():
            row[key] = self.metric(getattr(s, key), kind)
        return row

    def render_results(self, r: Results) -> Dict[str, Any]:
        out: Dict[str, Any] = {"locale": self.code}
        for key, kind in CORE_KINDS.items():
            out[key] = self.metric(getattr(r, key), kind)
        out["scenarios"] = [self.render_scenario(s) for s in r.scenarios]
        return out


EN_US = LocaleFormat(
    code="en-US", thousands_sep=",", decimal_sep=".", min_grouping_digits=4, group_fixed=False,
    labels=LABELS_EN,
)
ES_ES = LocaleFormat(
    code="es-ES", thousands_sep=".", decimal_sep=",", min_grouping_digits=5, group_fixed=True,
    labels=LABELS_ES,
)

LOCALES: Dict[str, LocaleFormat] = {f.code.lower(): f for f in (EN_US, ES_ES)}
_SHORT = {"en": "en-us", "es": "es-es"}


def get_locale(code: str) -> LocaleFormat:
    key = str(code or "").strip().lower().replace("_", "-")
    key = _SHORT.get(key, key)
    return LOCALES[key]
