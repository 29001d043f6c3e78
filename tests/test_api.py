"""
API Integration Tests

Tests the HTTP surface end to end using FastAPI TestClient
"""

import pytest
from fastapi.testclient import TestClient

from loan_tradeoff.amount import Amount
from loan_tradeoff.api import create_app
from loan_tradeoff.api.schemas import cents_str


@pytest.fixture
def client():
    """Create test client"""
    app = create_app()
    return TestClient(app)


class TestServiceEndpoints:
    """Test health and info endpoints"""

    def test_health_check(self, client):
        """Test health endpoint"""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "loan_tradeoff_api"

    def test_api_info(self, client):
        """Test root endpoint lists the API"""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["endpoints"]["scenarios"] == "/scenarios/simulate"
        assert data["default_period_days"] > 0


class TestScenarioEndpoints:
    """Test scenario simulation over HTTP"""

    def test_simulate_idealized(self, client):
        """Test an idealized scenario"""
        response = client.post("/scenarios/simulate", json={
            "principal": "1000",
            "period_count": 1,
            "loan_rate": "0.06",
            "deposit_apy": "0.04",
            "period_days": 31
        })
        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "idealized"
        assert float(data["net"]) == pytest.approx(-1.66, abs=0.01)
        assert float(data["net_cost"]) == pytest.approx(1.66, abs=0.01)
        assert data["payment_dates"] == []

    def test_simulate_real_world(self, client):
        """Test a real-world scenario returns its due dates"""
        response = client.post("/scenarios/simulate", json={
            "principal": 900,
            "period_count": 3,
            "deposit_apy": 0.04,
            "mode": "real-world",
            "start_date": "2024-01-31"
        })
        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "real-world"
        assert data["payment_dates"] == ["2024-02-29", "2024-03-31", "2024-04-30"]
        assert data["payment"] == "300.00000000000000000000"

    def test_missing_start_date(self, client):
        """Test engine errors map to 400"""
        response = client.post("/scenarios/simulate", json={
            "principal": 1000,
            "period_count": 3,
            "mode": "real"
        })
        assert response.status_code == 400
        assert "start_date" in response.json()["detail"]

    def test_unknown_mode(self, client):
        """Test an unknown mode is a 400"""
        response = client.post("/scenarios/simulate", json={
            "principal": 1000,
            "period_count": 3,
            "mode": "bogus"
        })
        assert response.status_code == 400

    @pytest.mark.parametrize("field", ["deposit_apy", "loan_rate", "principal"])
    def test_oversized_values(self, client, field):
        """Test values beyond the supported magnitude are a 400, not a server error"""
        payload = {"principal": "1000", "period_count": 1}
        payload[field] = "1e5000"
        response = client.post("/scenarios/simulate", json=payload)
        assert response.status_code == 400
        assert "must be" in response.json()["detail"]

    @pytest.mark.parametrize("payload", [
        {"principal": -1, "period_count": 3},
        {"principal": 1000, "period_count": 0},
        {"principal": "abc", "period_count": 3},
        {"period_count": 3},
    ])
    def test_schema_violations(self, client, payload):
        """Test request validation failures are 422"""
        response = client.post("/scenarios/simulate", json=payload)
        assert response.status_code == 422


class TestLoanEndpoints:
    """Test loan quotes over HTTP"""

    def test_quote_zero_rate(self, client):
        """Test a zero-rate quote with schedule"""
        response = client.post("/loans/quote", json={
            "principal": "602.57",
            "period_count": 3,
            "rate": 0,
            "first_due_date": "2024-01-31"
        })
        assert response.status_code == 200
        data = response.json()
        assert data["payment"] == "200.85000000000000000000"
        assert data["final_payment"] == "200.87000000000000000000"
        assert len(data["schedule"]) == 3
        assert data["schedule"][1]["due_date"] == "2024-02-29"

    def test_quote_without_schedule(self, client):
        """Test the schedule can be omitted"""
        response = client.post("/loans/quote", json={
            "principal": 1200,
            "period_count": 12,
            "rate": "0.10",
            "include_schedule": False
        })
        assert response.status_code == 200
        data = response.json()
        assert float(data["payment"]) == pytest.approx(105.50, abs=0.01)
        assert data["total_interest"] == "65.98000000000000000000"
        assert data["schedule"] == []

    def test_unsupported_period_type(self, client):
        """Test engine validation errors are 400"""
        response = client.post("/loans/quote", json={
            "principal": 1200,
            "period_count": 12,
            "period_type": "week"
        })
        assert response.status_code == 400
        assert "period type" in response.json()["detail"]

    def test_oversized_principal(self, client):
        """Test a principal beyond the supported magnitude is a 400"""
        response = client.post("/loans/quote", json={
            "principal": "1" * 4400,
            "period_count": 12
        })
        assert response.status_code == 400
        assert "Principal" in response.json()["detail"]


class TestSavingsPlanEndpoints:
    """Test the savings plan calculator over HTTP"""

    def test_monthly_plan(self, client):
        """Test a monthly plan"""
        response = client.post("/savings-plans", json={
            "principal": 1200,
            "term_count": 12,
            "period": "monthly",
            "apr_percent": 0,
            "apy_percent": 4.5
        })
        assert response.status_code == 200
        data = response.json()
        assert data["payment_per_period"] == "100.00"
        assert data["additional_out_of_pocket"] == "0.00"
        assert float(data["total_savings_interest"]) == pytest.approx(29.45, abs=0.01)
        assert len(data["schedule"]) == 12

    def test_unsupported_period(self, client):
        """Test engine validation errors are 400"""
        response = client.post("/savings-plans", json={
            "principal": 1000,
            "term_count": 6,
            "period": "daily"
        })
        assert response.status_code == 400
        assert "period" in response.json()["detail"]

    def test_invalid_principal(self, client):
        """Test a zero principal is a 400"""
        response = client.post("/savings-plans", json={
            "principal": 0,
            "term_count": 6,
            "period": "monthly"
        })
        assert response.status_code == 400


class TestCentsFormatting:
    """Test cent strings in savings plan responses"""

    def test_rounds_half_away_from_zero(self):
        """Test conventional rounding to two places"""
        assert cents_str(Amount("1.005")) == "1.01"
        assert cents_str(Amount("-1.005")) == "-1.01"
        assert cents_str(Amount("-0.004")) == "0.00"

    def test_wide_values_keep_every_digit(self):
        """Test values wider than the default decimal context format exactly"""
        wide = "9" * 40
        assert cents_str(Amount(wide + ".125")) == wide + ".13"
        assert cents_str(Amount("1e999")) == "1" + "0" * 999 + ".00"
