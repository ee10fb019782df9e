import pytest

from callcenter_wfm import (
    OperatingHoursTrafficModel,
    PeakHourTrafficModel,
    PlannerConfig,
    traffic_model_from_name,
)


def test_defaults():
    config = PlannerConfig()
    assert config.target_service_level == 80
    assert config.target_answer_seconds == 20
    assert config.availability_factor == 0.70
    assert config.max_iterations == 5000
    assert config.traffic_model == PeakHourTrafficModel(0.14)


def test_traffic_formulas():
    assert PeakHourTrafficModel(0.14).traffic(2000, 300) == pytest.approx(2000 * 0.14 * 300 / 3600)
    assert OperatingHoursTrafficModel(13).traffic(2000, 300) == pytest.approx(600000 / 46800)


def test_traffic_model_from_name():
    assert traffic_model_from_name("peak_hour") == PeakHourTrafficModel()
    assert traffic_model_from_name("peak_hour", 0.12) == PeakHourTrafficModel(0.12)
    assert traffic_model_from_name("operating_hours", 10) == OperatingHoursTrafficModel(10)
    with pytest.raises(ValueError):
        traffic_model_from_name("hourly_average")
