# tests/test_api_analyse.py
import pytest


def test_analyse_success(client):
    payload = {
        "url": "https://www.rightmove.co.uk/properties/123",
        "purchasePrice": 200000,
        "rent": 1200,
        "depositPercent": 25,
        "interestRate": 5.5,
        "refurb": 0,
        "sdlt": 0,
        "expensePercent": 15,
    }
    r = client.post("/analyse", json=payload)
    assert r.status_code == 200, r.text
    data = r.json()

    assert data["purchasePrice"] == 200000
    assert data["rent"] == 1200
    assert data["grossYieldPercent"] == pytest.approx(7.2)
    assert data["monthlyInterest"] == pytest.approx(687.5)
    assert data["otherMonthlyCosts"] == pytest.approx(180)
    assert data["netMonthlyCashflow"] == pytest.approx(332.5)
    assert data["totalCashIn"] == pytest.approx(50000)
    assert data["tier"] == "strong"
    assert data["summary"].startswith("Strong yield")
    assert data["sdltEstimated"] is False
    assert "aiSummary" not in data


def test_missing_rent_returns_400(client):
    r = client.post("/analyse", json={"purchasePrice": 200000})
    assert r.status_code == 400
    assert "Please provide purchasePrice and rent" in r.text


def test_zero_price_returns_400(client):
    r = client.post("/analyse", json={"purchasePrice": 0, "rent": 900})
    assert r.status_code == 400


def test_string_and_percent_inputs_are_normalized(client):
    payload = {
        "purchasePrice": "200000",
        "rent": "1000",
        "depositPercent": "25%",
        "interestRate": "6.5%",
        "refurb": "",
        "sdlt": "0",
        "expensePercent": None,
    }
    r = client.post("/analyse", json=payload)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["interestRate"] == pytest.approx(6.5)
    assert data["expensePercent"] == pytest.approx(15)
    assert data["netMonthlyCashflow"] == pytest.approx(37.5)
    assert data["tier"] == "marginal"


def test_blank_sdlt_is_estimated(client):
    r = client.post("/analyse", json={"purchasePrice": 200000, "rent": 1200, "sdlt": None})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["sdltEstimated"] is True
    assert data["sdlt"] == pytest.approx(11500)
    assert data["totalCashIn"] == pytest.approx(61500)


def test_narrative_failure_omits_ai_summary(client, use_narrative):
    async def failing(prompt):
        raise TimeoutError("upstream timed out")

    use_narrative(failing)
    r = client.post("/analyse", json={"purchasePrice": 300000, "rent": 1000, "sdlt": 0})
    assert r.status_code == 200, r.text
    data = r.json()
    assert "aiSummary" not in data
    assert data["tier"] == "negative"
    assert data["grossYieldPercent"] == pytest.approx(4.0)


def test_narrative_success_adds_ai_summary(client, use_narrative):
    async def answering(prompt):
        return "Thin margins.\nNegotiate on price."

    use_narrative(answering)
    r = client.post("/analyse", json={"purchasePrice": 200000, "rent": 1200, "sdlt": 0})
    assert r.status_code == 200, r.text
    assert r.json()["aiSummary"] == "Thin margins.\nNegotiate on price."


def test_sdlt_endpoint(client):
    r = client.get("/sdlt", params={"purchase_price": 600000})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["sdlt"] == pytest.approx(102000)
    assert data["bandedTotal"] == pytest.approx(50000)
    assert data["flatRuleApplied"] is True
    assert len(data["bands"]) == 3


def test_sdlt_endpoint_rejects_non_positive_price(client):
    r = client.get("/sdlt", params={"purchase_price": 0})
    assert r.status_code == 422


def test_alias_keys_are_honoured(client):
    payload = {
        "purchasePrice": 200000,
        "monthlyRent": 1200,
        "interestRatePercent": 4.0,
        "refurbCost": 5000,
        "sdlt": 0,
    }
    r = client.post("/analyse", json=payload)
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["rent"] == 1200
    assert data["interestRate"] == pytest.approx(4.0)
    assert data["refurb"] == pytest.approx(5000)
    assert data["totalCashIn"] == pytest.approx(55000)


def test_snake_case_keys_are_honoured(client):
    r = client.post(
        "/analyse",
        json={"purchase_price": 200000, "monthly_rent": 1200, "deposit_percent": 40, "sdlt": 0},
    )
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["purchasePrice"] == 200000
    assert data["depositPercent"] == pytest.approx(40)


def test_boolean_optional_falls_back_to_default(client):
    r = client.post(
        "/analyse", json={"purchasePrice": 200000, "rent": 1200, "depositPercent": True, "sdlt": 0}
    )
    assert r.status_code == 200, r.text
    assert r.json()["depositPercent"] == pytest.approx(25)


def test_boolean_price_returns_400(client):
    r = client.post("/analyse", json={"purchasePrice": True, "rent": 1200})
    assert r.status_code == 400


def test_non_numeric_optional_falls_back_to_default(client):
    r = client.post(
        "/analyse", json={"purchasePrice": 200000, "rent": 1200, "interestRate": "lots", "sdlt": 0}
    )
    assert r.status_code == 200, r.text
    assert r.json()["interestRate"] == pytest.approx(5.5)


def test_huge_price_returns_400(client):
    r = client.post("/analyse", json={"purchasePrice": 10**400, "rent": 1200})
    assert r.status_code == 400
