"""Google Ads REST API client.

Issues GAQL queries through ``googleAds:searchStream`` with a bearer access
token and developer token, and shapes the rows into the reporting models the
dashboard consumes.
"""

import logging
from collections import defaultdict
from datetime import date
from typing import Any, Optional

import httpx

from src.domain.periods import DateWindow, percent_change, resolve_period
from src.domain.reporting import (
    Account,
    AccountMetrics,
    ConversionRecord,
    ConversionReport,
    DailyConversions,
    DailyMetrics,
    MAX_CONVERSION_RECORDS,
    MetricTrends,
)

logger = logging.getLogger(__name__)

API_HOST = "https://googleads.googleapis.com"

# Conversion action categories reported as phone leads; everything else is a form lead
CALL_CATEGORIES = frozenset({"PHONE_CALL_LEAD"})


class GoogleAdsApiError(Exception):
    """Raised when a Google Ads API call fails.

    Attributes:
        message: Upstream (or transport) error message
        status_code: HTTP status from Google, None for transport errors
        details: Upstream error body, passed through to API callers
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details if details is not None else {}


def normalize_customer_id(customer_id: str) -> str:
    """Strip dashes and other separators from a customer id.

    Raises:
        ValueError: If the id contains no digits.
    """
    digits = "".join(ch for ch in str(customer_id) if ch.isdigit())
    if not digits:
        raise ValueError(f"Invalid customer id: {customer_id!r}")
    return digits


def _error_from_response(response: httpx.Response) -> GoogleAdsApiError:
    try:
        body = response.json()
    except ValueError:
        body = {"raw": response.text[:1000]}

    # searchStream wraps errors in a one-element list
    error_obj = body[0] if isinstance(body, list) and body else body
    message = None
    if isinstance(error_obj, dict):
        message = (error_obj.get("error") or {}).get("message")
    return GoogleAdsApiError(
        message or f"Google Ads API returned HTTP {response.status_code}",
        status_code=response.status_code,
        details=body,
    )


def _int(value: Any) -> int:
    # int64 fields arrive as JSON strings
    return int(value or 0)


def _float(value: Any) -> float:
    return float(value or 0)


def _date_clause(window: DateWindow) -> str:
    return f"segments.date BETWEEN '{window.start.isoformat()}' AND '{window.end.isoformat()}'"


class GoogleAdsClient:
    """Thin REST client bound to one access token.

    Args:
        access_token: OAuth2 access token
        developer_token: Google Ads developer token
        login_customer_id: Manager (MCC) id to act through, if any
        api_version: Google Ads API version, e.g. "v18"
        timeout: Request timeout in seconds; None disables the timeout
        transport: Optional httpx transport (tests)
    """

    def __init__(
        self,
        access_token: str,
        developer_token: str,
        login_customer_id: Optional[str] = None,
        api_version: str = "v18",
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        headers = {
            "Authorization": f"Bearer {access_token}",
            "developer-token": developer_token,
            "Content-Type": "application/json",
        }
        if login_customer_id:
            headers["login-customer-id"] = normalize_customer_id(login_customer_id)

        self._http = httpx.Client(
            base_url=f"{API_HOST}/{api_version}",
            headers=headers,
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def __enter__(self) -> "GoogleAdsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # ------------------------------------------------------------------
    # Raw API calls
    # ------------------------------------------------------------------

    def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise GoogleAdsApiError(f"Google Ads API request failed: {exc}") from exc

        if response.is_error:
            error = _error_from_response(response)
            logger.error(
                "Google Ads API call failed",
                extra={"url": url, "status_code": response.status_code},
            )
            raise error
        return response.json()

    def list_accessible_customers(self) -> list[str]:
        """Return the customer ids the access token can reach directly."""
        payload = self._request("GET", "/customers:listAccessibleCustomers") or {}
        # {"resourceNames": ["customers/1234567890", ...]}
        return [rn.split("/", 1)[-1] for rn in payload.get("resourceNames", [])]

    def search(self, customer_id: str, query: str) -> list[dict]:
        """Run a GAQL query and return all result rows."""
        cid = normalize_customer_id(customer_id)
        payload = self._request(
            "POST", f"/customers/{cid}/googleAds:searchStream", json={"query": query}
        )
        rows: list[dict] = []
        for batch in payload or []:
            rows.extend(batch.get("results", []))
        return rows

    # ------------------------------------------------------------------
    # Shaped reports
    # ------------------------------------------------------------------

    def describe_customer(self, customer_id: str) -> Account:
        rows = self.search(
            customer_id,
            "SELECT customer.id, customer.descriptive_name, customer.currency_code, "
            "customer.time_zone, customer.manager FROM customer LIMIT 1",
        )
        customer = rows[0].get("customer", {}) if rows else {}
        cid = str(customer.get("id") or customer_id)
        return Account(
            id=cid,
            name=customer.get("descriptiveName") or f"Account {cid}",
            currency_code=customer.get("currencyCode"),
            time_zone=customer.get("timeZone"),
            is_manager=bool(customer.get("manager", False)),
        )

    def get_account_list(self) -> list[Account]:
        """Describe every accessible customer.

        A customer that cannot be described (cancelled, no permission) is
        still listed under a placeholder name.
        """
        accounts = []
        for cid in self.list_accessible_customers():
            try:
                accounts.append(self.describe_customer(cid))
            except GoogleAdsApiError as exc:
                logger.warning(
                    "Could not describe customer %s: %s", cid, exc.message
                )
                accounts.append(Account(id=cid, name=f"Account {cid}"))
        return accounts

    def get_account_metrics(
        self,
        customer_id: str,
        period: str,
        today: Optional[date] = None,
    ) -> AccountMetrics:
        """Totals, daily series and trends for *period*.

        One query covers both the period and the preceding window of equal
        length; rows are split by date in Python.
        """
        cid = normalize_customer_id(customer_id)
        window = resolve_period(period, today)
        previous = window.previous()
        rows = self.search(
            cid,
            "SELECT segments.date, metrics.impressions, metrics.clicks, "
            "metrics.cost_micros, metrics.conversions FROM customer "
            f"WHERE {_date_clause(DateWindow(previous.start, window.end))}",
        )

        daily: dict[str, DailyMetrics] = {
            d.isoformat(): DailyMetrics(date=d.isoformat()) for d in window.dates()
        }
        prev = {"impressions": 0, "clicks": 0, "cost": 0.0, "conversions": 0.0}

        for row in rows:
            day = (row.get("segments") or {}).get("date")
            m = row.get("metrics") or {}
            impressions = _int(m.get("impressions"))
            clicks = _int(m.get("clicks"))
            cost = _int(m.get("costMicros")) / 1_000_000
            conversions = _float(m.get("conversions"))

            if day in daily:
                point = daily[day]
                point.impressions += impressions
                point.clicks += clicks
                point.cost += cost
                point.conversions += conversions
            elif day and previous.contains(date.fromisoformat(day)):
                prev["impressions"] += impressions
                prev["clicks"] += clicks
                prev["cost"] += cost
                prev["conversions"] += conversions

        series = list(daily.values())
        for point in series:
            point.cost = round(point.cost, 2)

        impressions = sum(p.impressions for p in series)
        clicks = sum(p.clicks for p in series)
        cost = round(sum(p.cost for p in series), 2)
        conversions = round(sum(p.conversions for p in series), 2)
        cpl = round(cost / conversions, 2) if conversions else 0.0
        prev_cpl = prev["cost"] / prev["conversions"] if prev["conversions"] else 0.0

        return AccountMetrics(
            account_id=cid,
            period=period,
            start_date=window.start.isoformat(),
            end_date=window.end.isoformat(),
            impressions=impressions,
            clicks=clicks,
            cost=cost,
            conversions=conversions,
            cost_per_lead=cpl,
            ctr=round(clicks / impressions * 100, 2) if impressions else 0.0,
            trends=MetricTrends(
                impressions=percent_change(impressions, prev["impressions"]),
                clicks=percent_change(clicks, prev["clicks"]),
                cost=percent_change(cost, prev["cost"]),
                conversions=percent_change(conversions, prev["conversions"]),
                cost_per_lead=percent_change(cpl, prev_cpl),
            ),
            daily=series,
        )

    def get_conversion_data(
        self,
        customer_id: str,
        period: str,
        today: Optional[date] = None,
    ) -> ConversionReport:
        """Form vs. call conversions for *period*, per day and per ad group."""
        cid = normalize_customer_id(customer_id)
        window = resolve_period(period, today)
        rows = self.search(
            cid,
            "SELECT segments.date, segments.conversion_action_category, "
            "campaign.name, ad_group.id, ad_group.name, metrics.conversions "
            f"FROM ad_group WHERE {_date_clause(window)} AND metrics.conversions > 0",
        )

        daily = {
            d.isoformat(): DailyConversions(date=d.isoformat()) for d in window.dates()
        }
        totals: dict[str, float] = defaultdict(float)
        records: list[ConversionRecord] = []

        for row in rows:
            segments = row.get("segments") or {}
            day = segments.get("date")
            category = segments.get("conversionActionCategory") or "DEFAULT"
            lead_type = "call" if category in CALL_CATEGORIES else "form"
            conversions = _float((row.get("metrics") or {}).get("conversions"))
            ad_group = row.get("adGroup") or {}

            if day in daily:
                point = daily[day]
                if lead_type == "call":
                    point.call_conversions += conversions
                else:
                    point.form_conversions += conversions
            totals[lead_type] += conversions
            records.append(
                ConversionRecord(
                    id=f"{day}-{ad_group.get('id', 'unknown')}-{category.lower()}",
                    date=day or "",
                    type=lead_type,
                    campaign=(row.get("campaign") or {}).get("name", ""),
                    ad_group=ad_group.get("name", ""),
                    conversions=conversions,
                )
            )

        records.sort(key=lambda r: r.date, reverse=True)
        form_total = round(totals["form"], 2)
        call_total = round(totals["call"], 2)

        return ConversionReport(
            account_id=cid,
            period=period,
            start_date=window.start.isoformat(),
            end_date=window.end.isoformat(),
            total_conversions=round(form_total + call_total, 2),
            form_conversions=form_total,
            call_conversions=call_total,
            daily=list(daily.values()),
            records=records[:MAX_CONVERSION_RECORDS],
        )
