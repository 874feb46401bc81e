from calc_backend.domain import loans


def test_amortization_endpoint(client):
    response = client.post(
        "/api/engine/amortization",
        json={"principal": 200000, "annual_rate_percent": 6, "horizon_years": 30},
    )
    assert response.status_code == 200

    data = response.get_json()
    assert data["payment"] == 1199.11
    assert data["periods"] == 360
    assert data["scheduled_periods"] == 360
    assert len(data["schedule"]) == 360
    assert len(data["yearly"]) == 30
    assert data["yearly"][-1]["balance"] == 0
    assert data["summary"]["total_contributions"] == 200000


def test_accumulation_endpoint(client):
    response = client.post(
        "/api/engine/accumulation",
        json={
            "principal": 10000,
            "annual_rate_percent": 7,
            "compounding_frequency": "annually",
            "horizon_years": 10,
        },
    )
    assert response.status_code == 200
    assert response.get_json()["final_balance"] == 19671.52


def test_drawdown_endpoint(client):
    response = client.post(
        "/api/engine/drawdown",
        json={"principal": 10000, "withdrawal_amount": 12000, "horizon_years": 2},
    )
    assert response.status_code == 200

    data = response.get_json()
    assert data["depleted_at_period"] == 10
    assert data["final_balance"] == 0


def test_solver_endpoints(client):
    payment = client.post(
        "/api/engine/solve/payment",
        json={"principal": 200000, "annual_rate_percent": 6, "horizon_years": 30},
    )
    assert payment.get_json() == {"payment": 1199.11}

    months = client.post(
        "/api/engine/solve/months-to-payoff",
        json={"principal": 5000, "annual_rate_percent": 18.9, "fixed_payment": 200},
    )
    assert months.get_json() == {"periods": 33}

    goal = client.post(
        "/api/engine/solve/retirement-goal",
        json={"principal": 0, "withdrawal_amount": 12000, "horizon_years": 2},
    )
    assert goal.get_json() == {"goal": 24000}


def test_payment_too_low_is_a_bad_request(client):
    response = client.post(
        "/api/engine/amortization",
        json={"principal": 10000, "annual_rate_percent": 12, "fixed_payment": 100},
    )
    assert response.status_code == 400

    data = response.get_json()
    assert data["error"] == "payment_too_low"
    assert data["field"] == "fixed_payment"


def test_invalid_parameter_is_a_bad_request(client):
    response = client.post(
        "/api/engine/accumulation",
        json={"principal": -100, "horizon_years": 5},
    )
    assert response.status_code == 400
    assert response.get_json() == {
        "error": "invalid_parameter",
        "detail": "principal must be >= 0",
        "field": "principal",
    }


def test_non_convergent_schedule_is_a_server_error(client):
    response = client.post(
        "/api/engine/amortization",
        json={"principal": 1000000, "annual_rate_percent": 6, "fixed_payment": 5000.01},
    )
    assert response.status_code == 500
    assert response.get_json()["error"] == "did_not_converge"


def test_disagreeing_payoff_counts_are_a_server_error(client, monkeypatch):
    monkeypatch.setattr(loans, "solve_months_to_payoff", lambda params: 34)
    response = client.post(
        "/api/calc/credit-card",
        json={"balance": 5000, "interest_rate": 18.9, "monthly_payment": 200},
    )
    assert response.status_code == 500
    assert response.get_json()["error"] == "solver_mismatch"


def test_unknown_field_is_rejected(client):
    response = client.post(
        "/api/engine/amortization",
        json={"principal": 1000, "horizon_years": 1, "bogus": True},
    )
    assert response.status_code == 422
    assert response.get_json()["detail"][0]["loc"] == ["bogus"]


def test_mortgage_endpoint(client):
    response = client.post(
        "/api/calc/mortgage",
        json={
            "home_price": 300000,
            "down_payment": 60000,
            "loan_term_years": 30,
            "interest_rate": 4.5,
            "property_tax_rate": 1.2,
            "home_insurance": 1200,
        },
    )
    assert response.status_code == 200

    data = response.get_json()
    assert data["loan_amount"] == 240000
    assert data["monthly_property_tax"] == 300
    assert len(data["yearly"]) == 31


def test_loan_and_investment_endpoints(client):
    loan = client.post(
        "/api/calc/loan",
        json={"loan_amount": 25000, "interest_rate": 6.5, "loan_term_years": 5, "additional_payment": 100},
    )
    assert loan.status_code == 200
    assert loan.get_json()["months_saved"] > 0

    investment = client.post(
        "/api/calc/investment",
        json={"initial_investment": 10000, "interest_rate": 6, "years": 1},
    )
    assert investment.status_code == 200
    assert investment.get_json()["effective_annual_yield"] == 6.1678


def test_credit_card_endpoint(client):
    response = client.post(
        "/api/calc/credit-card",
        json={"balance": 5000, "interest_rate": 18.9, "monthly_payment": 200},
    )
    assert response.status_code == 200
    assert response.get_json()["months_to_payoff"] == 33


def test_credit_card_with_both_targets_is_rejected(client):
    response = client.post(
        "/api/calc/credit-card",
        json={"balance": 5000, "interest_rate": 18.9, "monthly_payment": 200, "months_to_payoff": 12},
    )
    assert response.status_code == 422


def test_compound_interest_endpoint(client):
    response = client.post(
        "/api/calc/compound-interest",
        json={"principal": 10000, "contribution": 0, "interest_rate": 7, "years": 10},
    )
    assert response.status_code == 200
    assert response.get_json()["future_value"] == 19671.52


def test_retirement_endpoint_uses_configured_default_horizon():
    from calc_backend.app import create_app

    app = create_app({"TESTING": True, "DEFAULT_YEARS_IN_RETIREMENT": 2})
    response = app.test_client().post(
        "/api/calc/retirement",
        json={
            "current_age": 30,
            "retirement_age": 31,
            "monthly_contribution": 1000,
            "annual_return": 0,
            "return_during_retirement": 0,
            "annual_expenses": 6000,
        },
    )
    assert response.status_code == 200

    data = response.get_json()
    assert data["retirement_savings_goal"] == 12000
    assert data["depleted_at_age"] == 32


def test_retirement_age_order_is_validated(client):
    response = client.post(
        "/api/calc/retirement",
        json={
            "current_age": 65,
            "retirement_age": 60,
            "annual_return": 5,
            "return_during_retirement": 4,
            "annual_expenses": 40000,
        },
    )
    assert response.status_code == 422


def test_alcohol_endpoint(client):
    response = client.post(
        "/api/calc/alcohol",
        json={"sex": "male", "weight": 70, "drinks": [{"type": "beer", "quantity": 1}]},
    )
    assert response.status_code == 200

    data = response.get_json()
    assert data["bac"] == 0.034
    assert isinstance(data["sober_at"], str)
    assert data["curve"][0] == {"hour": 0.0, "bac": 0.034}


def test_cors_allows_dev_frontend(client):
    response = client.get("/api/health", headers={"Origin": "http://localhost:5173"})
    assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"
