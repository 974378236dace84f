"""Derived, render-ready figures for the month page: KPI cards and pie slices."""
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional


@dataclass(frozen=True)
class KpiCard:
    label: str
    value: float
    unit: str = "$"

    def formatted(self) -> str:
        if self.unit == "%":
            return f"{self.value:.1f}%"
        return f"{self.unit}{self.value:,.2f}"


@dataclass(frozen=True)
class PieSlice:
    category: str
    amount: float
    percent_of_income: float


def kpi_cards(summary: Optional[Mapping[str, Any]]) -> List[KpiCard]:
    summary = summary or {}
    return [
        KpiCard("Total Income", float(summary.get("totalIncome", 0))),
        KpiCard("Total Expenses", float(summary.get("totalExpenses", 0))),
        KpiCard("Remaining Balance", float(summary.get("remainingBalance", 0))),
        KpiCard("Spent", float(summary.get("spentPercentage", 0)), unit="%"),
    ]


def pie_slices(summary: Optional[Mapping[str, Any]]) -> List[PieSlice]:
    """One slice per expense category, sized as a share of total income."""
    summary = summary or {}
    total_income = float(summary.get("totalIncome", 0))
    slices = []
    for row in summary.get("categoryBreakdown", []):
        amount = float(row["amount"])
        percent = amount / total_income * 100 if total_income > 0 else 0.0
        slices.append(PieSlice(row["category"], amount, percent))
    return slices


def render_month(label: str, summary: Optional[Mapping[str, Any]],
                 incomes: Iterable[Dict[str, Any]], expenses: Iterable[Dict[str, Any]],
                 width: int = 30) -> str:
    lines = [label, "=" * len(label)]
    lines += [f"{card.label:<18} {card.formatted():>14}" for card in kpi_cards(summary)]

    slices = pie_slices(summary)
    if slices:
        lines += ["", "Spending by category"]
        for piece in slices:
            bar = "#" * min(width, round(piece.percent_of_income / 100 * width))
            lines.append(f"{piece.category:<16} {bar:<{width}} {piece.percent_of_income:5.1f}%  ${piece.amount:,.2f}")

    lines += ["", "Incomes"]
    lines += [f"  {i['date']}  {i['source']:<20} ${float(i['amount']):,.2f}" for i in incomes] or ["  (none)"]
    lines += ["", "Expenses"]
    lines += [
        f"  {e['date']}  {e['category']:<12} {e['description']:<20} ${float(e['amount']):,.2f}" for e in expenses
    ] or ["  (none)"]
    return "\n".join(lines)
