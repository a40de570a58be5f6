import pytest

from options_analytics.options import Greeks, RiskClassifier, RiskLevel, RiskThresholds

SPOT = 26100.0
QUIET = Greeks(delta=0.5, gamma=1e-5, vega=1.0, theta=-5.0)


@pytest.mark.parametrize(
    "days, expected",
    [
        (0.0, RiskLevel.DANGER),
        (2.99, RiskLevel.DANGER),
        (3.0, RiskLevel.CAUTION),
        (9.99, RiskLevel.CAUTION),
        (10.0, RiskLevel.SAFE),
        (45.0, RiskLevel.SAFE),
    ],
)
def test_days_to_expiry_sets_base_level(days, expected):
    assert RiskClassifier().classify(days, QUIET, spot=SPOT) == expected


def test_high_gamma_escalates_one_level():
    # |gamma| * spot / 100 = 0.3 > 0.25
    heavy_gamma = Greeks(delta=0.5, gamma=0.3 * 100 / SPOT, vega=1.0, theta=-5.0)
    classifier = RiskClassifier()

    assert classifier.is_high_sensitivity(heavy_gamma, spot=SPOT)
    assert classifier.classify(30.0, heavy_gamma, spot=SPOT) == RiskLevel.CAUTION
    assert classifier.classify(5.0, heavy_gamma, spot=SPOT) == RiskLevel.DANGER
    assert classifier.classify(1.0, heavy_gamma, spot=SPOT) == RiskLevel.DANGER


def test_high_vega_escalates_one_level():
    # |vega| / spot = 0.006 > 0.005
    heavy_vega = Greeks(delta=0.5, gamma=1e-5, vega=0.006 * SPOT, theta=-5.0)
    assert RiskClassifier().classify(30.0, heavy_vega, spot=SPOT) == RiskLevel.CAUTION


def test_custom_thresholds():
    classifier = RiskClassifier(
        thresholds=RiskThresholds(danger_days=1.0, caution_days=2.0, gamma_threshold=10.0)
    )
    assert classifier.classify(1.5, QUIET, spot=SPOT) == RiskLevel.CAUTION
    assert classifier.classify(5.0, QUIET, spot=SPOT) == RiskLevel.SAFE


def test_classifier_rejects_non_positive_spot():
    with pytest.raises(ValueError, match="spot"):
        RiskClassifier().is_high_sensitivity(QUIET, spot=0.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"danger_days": -1.0},
        {"danger_days": 5.0, "caution_days": 4.0},
        {"gamma_threshold": 0.0},
        {"vega_threshold": -0.1},
    ],
)
def test_thresholds_validation(kwargs):
    with pytest.raises(ValueError):
        RiskThresholds(**kwargs)


def test_risk_level_ordering_helpers():
    assert RiskLevel.SAFE.escalate() == RiskLevel.CAUTION
    assert RiskLevel.CAUTION.escalate() == RiskLevel.DANGER
    assert RiskLevel.DANGER.escalate() == RiskLevel.DANGER
    assert RiskLevel.worst(RiskLevel.SAFE, RiskLevel.DANGER) == RiskLevel.DANGER
    assert RiskLevel.worst(RiskLevel.CAUTION, RiskLevel.SAFE) == RiskLevel.CAUTION
    assert RiskLevel.worst("safe", "caution") == RiskLevel.CAUTION
    with pytest.raises(ValueError):
        RiskLevel.worst()
