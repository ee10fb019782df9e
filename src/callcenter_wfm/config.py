"""Planner configuration and traffic-intensity models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PeakHourTrafficModel:
    """Traffic from the share of daily volume landing in the busiest hour.

    Attributes:
        peak_hour_ratio: Fraction of daily calls arriving in the peak hour.
    """
    peak_hour_ratio: float = 0.14

    name = "peak_hour"

    def __post_init__(self) -> None:
        if not 0 < self.peak_hour_ratio <= 1:
            raise ValueError("peak_hour_ratio must be in (0, 1]")

    def traffic(self, calls: float, aht: float) -> float:
        """Offered load in Erlangs: peak-hour calls * AHT / 3600."""
        peak_calls = calls * self.peak_hour_ratio
        return peak_calls * aht / 3600


@dataclass(frozen=True)
class OperatingHoursTrafficModel:
    """Traffic from daily volume spread evenly over the open hours.

    Attributes:
        operating_hours: Active hours per day the volume is spread across.
    """
    operating_hours: float = 13.0

    name = "operating_hours"

    def __post_init__(self) -> None:
        if self.operating_hours <= 0:
            raise ValueError("operating_hours must be > 0")

    def traffic(self, calls: float, aht: float) -> float:
        return calls * aht / (self.operating_hours * 3600)


TRAFFIC_MODELS = {
    PeakHourTrafficModel.name: PeakHourTrafficModel,
    OperatingHoursTrafficModel.name: OperatingHoursTrafficModel,
}


def traffic_model_from_name(name: str, parameter: float | None = None):
    """Build a traffic model from its name and optional parameter.

    Args:
        name: "peak_hour" or "operating_hours".
        parameter: Peak-hour ratio or operating hours; model default if None.

    Raises:
        ValueError: If the name is unknown.
    """
    try:
        model_cls = TRAFFIC_MODELS[name]
    except KeyError:
        raise ValueError(
            f"Unknown traffic model {name!r}; expected one of {sorted(TRAFFIC_MODELS)}"
        ) from None
    if parameter is None:
        return model_cls()
    return model_cls(parameter)


@dataclass(frozen=True)
class PlannerConfig:
    """Business parameters shared by the solver, forecaster and gap analysis.

    Attributes:
        target_service_level: Target service level in percent, default 80
        target_answer_seconds: Answer-time threshold for the SL formula, default 20
        availability_factor: Share of paid time an agent is on queue, default 0.70
        traffic_model: How daily volume becomes Erlangs (peak-hour by default)
        max_iterations: Hard cap on the agent search, default 5000
        default_aht: Handle time used by gap analysis when none is recorded
        min_samples_per_day: Samples a day-of-month bucket needs to be reported
        surplus_gap: Mean gap at or above which a day may be a surplus
        surplus_min_service_level: Mean SL (percent) a surplus day must reach
        deficit_gap: Mean gap at or below which a day is a deficit
        near_perfect_low: Lower bound of the near-perfect realization rate
        near_perfect_high: Upper bound of the near-perfect realization rate
    """
    target_service_level: float = 80.0
    target_answer_seconds: float = 20.0
    availability_factor: float = 0.70
    traffic_model: PeakHourTrafficModel | OperatingHoursTrafficModel = field(
        default_factory=PeakHourTrafficModel
    )
    max_iterations: int = 5000
    default_aht: float = 300.0
    min_samples_per_day: int = 2
    surplus_gap: float = 1.0
    surplus_min_service_level: float = 86.0
    deficit_gap: float = -0.5
    near_perfect_low: float = 1.00
    near_perfect_high: float = 1.05

    def __post_init__(self) -> None:
        if not 0 < self.availability_factor <= 1:
            raise ValueError("availability_factor must be in (0, 1]")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")
        if self.target_answer_seconds < 0:
            raise ValueError("target_answer_seconds must be >= 0")
        if self.min_samples_per_day < 1:
            raise ValueError("min_samples_per_day must be >= 1")
