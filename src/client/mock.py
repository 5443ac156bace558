"""Deterministic demo data for running the dashboard without Google Ads.

Values are drawn from a generator seeded with the account, period and window
end date, so the same request on the same day always returns the same data.
Daily values are generated first and totals are summed from them, which keeps
totals, breakdowns and charts consistent with each other.
"""

import random
from datetime import date, datetime, timezone
from typing import Optional

from src.client.base import DashboardDataSource
from src.domain.periods import DateWindow, percent_change, resolve_period
from src.domain.reporting import (
    Account,
    AccountMetrics,
    ConnectionTestResult,
    ConversionRecord,
    ConversionReport,
    DailyConversions,
    DailyMetrics,
    MAX_CONVERSION_RECORDS,
    MetricTrends,
)

DEMO_ACCOUNTS = [
    Account(id="1234567890", name="Demo Plumbing Co.", currency_code="USD", time_zone="America/New_York"),
    Account(id="2345678901", name="Demo Dental Group", currency_code="USD", time_zone="America/Chicago"),
    Account(id="3456789012", name="Demo Law Firm", currency_code="USD", time_zone="America/Los_Angeles"),
]

CAMPAIGNS = [
    "Brand Awareness Campaign",
    "Lead Generation Campaign",
    "Remarketing Campaign",
    "Competitor Keywords Campaign",
]

AD_GROUPS = [
    "Main Services",
    "Location Specific",
    "High Intent Keywords",
    "Product Specific",
]


def _simulate_day(rng: random.Random) -> dict:
    # About 120 conversions and 5,490 in spend over 30 days
    form = rng.randint(1, 5)
    call = rng.randint(0, 3)
    clicks = rng.randint(60, 120)
    return {
        "impressions": clicks * rng.randint(18, 30),
        "clicks": clicks,
        "cost": round(rng.uniform(150.0, 216.0), 2),
        "form": form,
        "call": call,
    }


def _totals(days: list[dict]) -> dict:
    totals = {
        "impressions": sum(d["impressions"] for d in days),
        "clicks": sum(d["clicks"] for d in days),
        "cost": round(sum(d["cost"] for d in days), 2),
        "conversions": float(sum(d["form"] + d["call"] for d in days)),
    }
    totals["cost_per_lead"] = (
        round(totals["cost"] / totals["conversions"], 2) if totals["conversions"] else 0.0
    )
    return totals


class MockDataSource(DashboardDataSource):
    """Generates demo data shaped exactly like the proxy's responses.

    Args:
        seed: Mixed into every generator seed; different seeds give different data
        today: Fixed "today" for reproducible output (defaults to the real date)
    """

    name = "mock"

    def __init__(self, seed: str = "ppc-dashboard", today: Optional[date] = None):
        self.seed = seed
        self._today = today

    def _window(self, period: str) -> DateWindow:
        return resolve_period(period, today=self._today)

    def _simulate(self, account_id: str, window: DateWindow) -> list[dict]:
        rng = random.Random(f"{self.seed}:{account_id}:{window.start}:{window.end}")
        return [{"date": day.isoformat(), **_simulate_day(rng)} for day in window.dates()]

    def test_connection(self) -> ConnectionTestResult:
        return ConnectionTestResult(
            success=True,
            message="Using demo data",
            accounts=self.get_accounts(),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    def get_accounts(self) -> list[Account]:
        return [account.model_copy() for account in DEMO_ACCOUNTS]

    def get_metrics(self, account_id: str, period: str) -> AccountMetrics:
        window = self._window(period)
        days = self._simulate(account_id, window)
        current = _totals(days)
        previous = _totals(self._simulate(account_id, window.previous()))

        return AccountMetrics(
            account_id=account_id,
            period=period,
            start_date=window.start.isoformat(),
            end_date=window.end.isoformat(),
            impressions=current["impressions"],
            clicks=current["clicks"],
            cost=current["cost"],
            conversions=current["conversions"],
            cost_per_lead=current["cost_per_lead"],
            ctr=round(current["clicks"] / current["impressions"] * 100, 2),
            trends=MetricTrends(
                **{key: percent_change(current[key], previous[key]) for key in current}
            ),
            daily=[
                DailyMetrics(
                    date=d["date"],
                    impressions=d["impressions"],
                    clicks=d["clicks"],
                    cost=d["cost"],
                    conversions=float(d["form"] + d["call"]),
                )
                for d in days
            ],
        )

    def get_conversions(self, account_id: str, period: str) -> ConversionReport:
        window = self._window(period)
        days = self._simulate(account_id, window)
        rng = random.Random(f"{self.seed}:{account_id}:{window.end}:records")

        records = []
        for d in reversed(days):
            for kind in ("form", "call"):
                if not d[kind]:
                    continue
                campaign = rng.randrange(len(CAMPAIGNS))
                ad_group = rng.randrange(len(AD_GROUPS))
                records.append(
                    ConversionRecord(
                        id=f"{d['date']}-{campaign}{ad_group}-{kind}",
                        date=d["date"],
                        type=kind,
                        campaign=CAMPAIGNS[campaign],
                        ad_group=AD_GROUPS[ad_group],
                        conversions=float(d[kind]),
                    )
                )

        form_total = float(sum(d["form"] for d in days))
        call_total = float(sum(d["call"] for d in days))
        return ConversionReport(
            account_id=account_id,
            period=period,
            start_date=window.start.isoformat(),
            end_date=window.end.isoformat(),
            total_conversions=form_total + call_total,
            form_conversions=form_total,
            call_conversions=call_total,
            daily=[
                DailyConversions(
                    date=d["date"],
                    form_conversions=float(d["form"]),
                    call_conversions=float(d["call"]),
                )
                for d in days
            ],
            records=records[:MAX_CONVERSION_RECORDS],
        )
