import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from options_analytics.options import (
    AnalyticsConfig,
    ContractInput,
    InvalidContractError,
    IVResult,
    OptionType,
    RiskLevel,
    SingleLegAnalyzer,
    VolatilitySource,
    bs_price,
)

HISTORY = tuple(26000.0 + 60.0 * ((-1) ** i) + 5.0 * i for i in range(40))


def _contract(**overrides) -> ContractInput:
    params = {
        "spot_price": 26100.0,
        "strike_price": 26100.0,
        "market_price": 150.0,
        "option_type": "call",
        "days_to_expiry": 5.0,
        "risk_free_rate": 0.07,
    }
    params.update(overrides)
    return ContractInput(**params)


def test_atm_call_with_market_premium():
    result = SingleLegAnalyzer().analyze(_contract())

    for value in (result.delta, result.gamma, result.theta, result.vega, result.rho):
        assert math.isfinite(value)
    assert result.theoretical_price > 0
    assert result.implied_volatility is not None
    assert result.iv_converged is True
    assert result.iv_used_fallback is False
    assert result.volatility_source == VolatilitySource.IMPLIED
    assert result.volatility_used == pytest.approx(result.implied_volatility)
    assert result.volatility_used > 0
    # Priced at its own implied vol, the model reprices the market premium.
    assert abs(result.price_difference) < 0.01


def test_price_difference_identity():
    result = SingleLegAnalyzer().analyze(_contract(use_implied_volatility=False))
    assert result.price_difference == pytest.approx(
        result.market_price - result.theoretical_price
    )


def test_near_expiry_is_never_safe():
    analyzer = SingleLegAnalyzer()
    far = analyzer.analyze(_contract(days_to_expiry=30.0, market_price=350.0))
    near = analyzer.analyze(_contract(days_to_expiry=2.0, market_price=120.0))

    assert near.risk_level != RiskLevel.SAFE
    assert near.risk_level == RiskLevel.DANGER
    assert near.risk_level.severity >= far.risk_level.severity


def test_inconsistent_premium_falls_back_to_default_volatility():
    result = SingleLegAnalyzer().analyze(_contract(market_price=40_000.0))

    assert result.iv_converged is False
    assert result.iv_used_fallback is True
    assert result.implied_volatility is None
    assert result.volatility_source == VolatilitySource.DEFAULT
    assert result.volatility_used == pytest.approx(0.20)
    assert result.volatility_used > 0


def test_inconsistent_premium_falls_back_to_historical_volatility():
    result = SingleLegAnalyzer().analyze(
        _contract(market_price=40_000.0, historical_spot_prices=HISTORY)
    )

    assert result.iv_converged is False
    assert result.iv_used_fallback is True
    assert result.volatility_source == VolatilitySource.HISTORICAL
    assert result.historical_volatility is not None
    assert result.volatility_used == pytest.approx(result.historical_volatility)


def test_iv_disabled_uses_history_then_default():
    analyzer = SingleLegAnalyzer()

    with_history = analyzer.analyze(
        _contract(use_implied_volatility=False, historical_spot_prices=HISTORY)
    )
    assert with_history.volatility_source == VolatilitySource.HISTORICAL
    assert with_history.iv_converged is False
    assert with_history.iv_used_fallback is True

    without = analyzer.analyze(_contract(use_implied_volatility=False))
    assert without.volatility_source == VolatilitySource.DEFAULT
    assert without.historical_volatility is None


def test_choose_volatility_keeps_both_estimates():
    choice = SingleLegAnalyzer().choose_volatility(
        _contract(historical_spot_prices=HISTORY)
    )

    assert choice.source == VolatilitySource.IMPLIED
    assert choice.used_fallback is False
    assert choice.implied is not None and choice.implied.converged
    assert choice.value == pytest.approx(choice.implied.implied_volatility)
    assert choice.historical is not None and choice.historical > 0


def test_configured_default_volatility_is_used():
    analyzer = SingleLegAnalyzer(config=AnalyticsConfig(default_volatility=0.35))
    result = analyzer.analyze(_contract(use_implied_volatility=False))
    expected = bs_price(26100.0, 26100.0, 5 / 365.0, 0.35, 0.07, "call")

    assert result.volatility_used == pytest.approx(0.35)
    assert result.theoretical_price == pytest.approx(expected)


def test_expired_contract_prices_at_intrinsic():
    result = SingleLegAnalyzer().analyze(
        _contract(strike_price=26000.0, market_price=100.0, days_to_expiry=0.0)
    )

    assert result.iv_converged is False
    assert result.theoretical_price == pytest.approx(100.0)
    assert result.delta == pytest.approx(1.0)
    assert result.gamma == 0.0
    assert result.risk_level == RiskLevel.DANGER


def test_failed_seeded_solve_retries_from_default_guess(monkeypatch):
    seeds: list[float | None] = []

    class _RecordingSolver:
        def solve_contract(self, contract, initial_guess=None):
            seeds.append(initial_guess)
            if initial_guess is not None:
                return IVResult.failed("seeded attempt failed", iterations=100)
            return IVResult(implied_volatility=0.3, converged=True, iterations=4)

    monkeypatch.setattr(
        SingleLegAnalyzer, "iv_solver", property(lambda self: _RecordingSolver())
    )
    result = SingleLegAnalyzer().analyze(_contract(historical_spot_prices=HISTORY))

    assert len(seeds) == 2
    assert seeds[0] == pytest.approx(result.historical_volatility)
    assert seeds[1] is None
    assert result.volatility_source == VolatilitySource.IMPLIED
    assert result.implied_volatility == pytest.approx(0.3)


def test_unseeded_solve_is_not_retried(monkeypatch):
    calls: list[float | None] = []

    class _FailingSolver:
        def solve_contract(self, contract, initial_guess=None):
            calls.append(initial_guess)
            return IVResult.failed("no root")

    monkeypatch.setattr(
        SingleLegAnalyzer, "iv_solver", property(lambda self: _FailingSolver())
    )
    result = SingleLegAnalyzer().analyze(_contract())

    assert calls == [None]
    assert result.volatility_source == VolatilitySource.DEFAULT


@pytest.mark.parametrize(
    "overrides, match",
    [
        ({"spot_price": 0.0}, "spot_price"),
        ({"strike_price": -100.0}, "strike_price"),
        ({"market_price": -1.0}, "market_price"),
        ({"days_to_expiry": -1.0}, "days_to_expiry"),
        ({"spot_price": float("nan")}, "finite"),
        ({"risk_free_rate": float("inf")}, "finite"),
        ({"market_price": "abc"}, "number"),
        ({"option_type": "straddle"}, "option_type"),
        ({"historical_spot_prices": [26000.0, "x"]}, "historical_spot_prices"),
        ({"historical_spot_prices": [26000.0, None]}, "numeric"),
    ],
)
def test_invalid_contracts_are_rejected(overrides, match):
    with pytest.raises(InvalidContractError, match=match):
        _contract(**overrides)


def test_invalid_contract_error_is_a_value_error():
    with pytest.raises(ValueError):
        _contract(spot_price=-1.0)


def test_contract_normalizes_inputs():
    contract = _contract(option_type="PE", spot_price=26100, historical_spot_prices=[1, 2, 3])
    assert contract.option_type == OptionType.PUT
    assert isinstance(contract.spot_price, float)
    assert contract.historical_spot_prices == (1.0, 2.0, 3.0)


def test_unusable_history_prices_are_kept_for_the_estimator():
    contract = _contract(historical_spot_prices=[26000.0, float("nan"), -1.0, "26050"])
    assert math.isnan(contract.historical_spot_prices[1])
    assert contract.historical_spot_prices[3] == 26050.0


def test_zero_market_price_is_valid_but_not_invertible():
    result = SingleLegAnalyzer().analyze(_contract(market_price=0.0))
    assert result.iv_converged is False
    assert result.iv_used_fallback is True


def test_result_to_dict_is_plain():
    out = SingleLegAnalyzer().analyze(_contract()).to_dict()
    assert out["volatility_source"] == "implied"
    assert out["risk_level"] in {"safe", "caution", "danger"}
    assert type(out["risk_level"]) is str


@given(
    spot=st.floats(min_value=1_000.0, max_value=50_000.0),
    moneyness=st.floats(min_value=0.9, max_value=1.1),
    premium_pct=st.floats(min_value=0.0, max_value=0.05),
    days=st.floats(min_value=0.0, max_value=90.0),
    opt=st.sampled_from(["CE", "PE"]),
)
@settings(max_examples=100, deadline=None)
def test_analyze_always_returns_consistent_result(spot, moneyness, premium_pct, days, opt):
    contract = ContractInput(
        spot_price=spot,
        strike_price=spot * moneyness,
        market_price=spot * premium_pct,
        option_type=opt,
        days_to_expiry=days,
    )
    result = SingleLegAnalyzer().analyze(contract)

    assert result.volatility_used > 0
    assert result.iv_used_fallback == (result.volatility_source != VolatilitySource.IMPLIED)
    assert result.iv_converged == (result.implied_volatility is not None)
    assert result.price_difference == pytest.approx(
        result.market_price - result.theoretical_price
    )
    if opt == "CE":
        assert 0.0 <= result.delta <= 1.0
    else:
        assert -1.0 <= result.delta <= 0.0
