from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from mortgage_analyzer.api.app import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def loan_payload():
    return {
        "home_price": "300000",
        "down_payment": "60000",
        "annual_rate_pct": "6",
        "amortization_years": "30",
    }


class TestHealth:
    def test_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestSchedule:
    def test_standard_schedule(self, client, loan_payload):
        resp = client.post("/api/v1/schedule", json=loan_payload)
        assert resp.status_code == 200
        data = resp.json()
        assert data["summary"]["periods_to_payoff"] == 360
        assert Decimal(data["summary"]["periodic_pi"]) == Decimal("1438.92")
        assert data["summary"]["paid_off"] is True
        assert len(data["records"]) == 360
        assert data["records"][0]["date_label"] == "P1"
        assert Decimal(data["records"][-1]["balance"]) == 0

    def test_baseline_flag(self, client, loan_payload):
        payload = {**loan_payload, "frequency": "bi-weekly", "extra_payment": "100"}
        resp = client.post("/api/v1/schedule?baseline=true", json=payload)
        assert resp.status_code == 200
        summary = resp.json()["summary"]
        assert summary["periods_per_year"] == 12
        assert Decimal(summary["total_extra"]) == 0

    def test_dated_schedule(self, client, loan_payload):
        payload = {**loan_payload, "start_date": "2026-11-01"}
        data = client.post("/api/v1/schedule", json=payload).json()
        assert data["records"][0]["date_label"] == "Nov 1, 2026"

    def test_rejects_non_positive_price(self, client, loan_payload):
        resp = client.post("/api/v1/schedule", json={**loan_payload, "home_price": "0"})
        assert resp.status_code == 422

    def test_rejects_down_payment_above_price(self, client, loan_payload):
        resp = client.post("/api/v1/schedule", json={**loan_payload, "down_payment": "400000"})
        assert resp.status_code == 422

    def test_rejects_unknown_frequency(self, client, loan_payload):
        resp = client.post("/api/v1/schedule", json={**loan_payload, "frequency": "weekly"})
        assert resp.status_code == 422


class TestAnalyze:
    def test_strategy_analysis(self, client, loan_payload):
        payload = {
            **loan_payload,
            "frequency": "accelerated-biweekly",
            "extra_payment": "50",
            "use_escrow": True,
            "tax_rate_pct": "1.2",
            "insurance_annual": "1500",
            "use_opportunity_cost": True,
        }
        resp = client.post("/api/v1/analyze", json=payload)
        assert resp.status_code == 200
        data = resp.json()
        assert data["has_strategy"] is True
        assert Decimal(data["mortgage_amount"]) == Decimal("240000")
        assert Decimal(data["interest_and_escrow_saved"]) > 0
        assert data["paid_off_in"].endswith("periods")
        assert data["actual"]["periods_per_year"] == 26
        assert data["baseline"]["periods_to_payoff"] == 360
        assert data["projection"] is not None
        assert data["projection"]["payoff_first"]["name"] == "Pay Off Debt Faster"
        assert len(data["projection"]["invest_extra"]["net_worth"]) == 360

    def test_no_projection_by_default(self, client, loan_payload):
        data = client.post("/api/v1/analyze", json=loan_payload).json()
        assert data["projection"] is None
        assert data["paid_off_in"] == "30 yrs, 0 months"
        assert Decimal(data["balance_at_term"]) > 0


class TestOpportunityCost:
    def test_projection(self, client, loan_payload):
        payload = {**loan_payload, "extra_payment": "200", "invest_rate_pct": "5"}
        resp = client.post("/api/v1/comparison/opportunity-cost", json=payload)
        assert resp.status_code == 200
        data = resp.json()
        assert len(data["invest_extra"]["year_fractions"]) == 360
        assert Decimal(data["payoff_first"]["year_fractions"][-1]) >= Decimal(data["horizon"])

    def test_requires_strategy(self, client, loan_payload):
        resp = client.post("/api/v1/comparison/opportunity-cost", json=loan_payload)
        assert resp.status_code == 400


class TestInvestRateBounds:
    def test_rejects_return_at_or_below_total_loss(self, client, loan_payload):
        payload = {
            **loan_payload,
            "extra_payment": "200",
            "use_opportunity_cost": True,
            "invest_rate_pct": "-150",
        }
        assert client.post("/api/v1/analyze", json=payload).status_code == 422
        payload["invest_rate_pct"] = "-100"
        assert client.post("/api/v1/comparison/opportunity-cost", json=payload).status_code == 422

    def test_accepts_negative_return(self, client, loan_payload):
        payload = {**loan_payload, "extra_payment": "200", "use_opportunity_cost": True, "invest_rate_pct": "-5"}
        resp = client.post("/api/v1/analyze", json=payload)
        assert resp.status_code == 200
        assert resp.json()["projection"] is not None
