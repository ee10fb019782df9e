"""Staffing Solver - Finds minimum headcount meeting a service-level target."""

import logging
import math
from dataclasses import dataclass

from .config import PlannerConfig
from .erlang_math import service_level

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StaffingResult:
    """Result of a staffing solve for one day of demand.

    Attributes:
        required_agents: Shrinkage-inflated headcount to schedule.
        service_level: Service level (0-1) achieved at base_agents.
        tve: Time-value-efficiency proxy, aht * service_level / base_agents.
            A diagnostic only, not a standard queueing metric.
        base_agents: Agents needed on queue before shrinkage.
        traffic: Offered load in Erlangs the solve was run against.
        converged: False when the iteration cap stopped the search.
    """
    required_agents: int
    service_level: float
    tve: float
    base_agents: int = 0
    traffic: float = 0.0
    converged: bool = True


NO_DEMAND = StaffingResult(required_agents=0, service_level=0.0, tve=0.0)


class StaffingSolver:
    """Finds the minimum agent count meeting a service-level target.

    Converts daily volume to Erlangs with the configured traffic model,
    then walks the agent count upward from the first stable point
    (floor(A) + 1) until the Erlang-C service level reaches the target.
    Service level is non-decreasing in agents, so the first hit is the
    minimum. The count is finally inflated for shrinkage.

    Example:
        >>> solver = StaffingSolver(PlannerConfig())
        >>> result = solver.solve(calls=2000, aht=300, target_service_level=80)
        >>> print(f"Need {result.required_agents} agents")
    """

    def __init__(self, config: PlannerConfig | None = None) -> None:
        """Initialize the solver.

        Args:
            config: Planner parameters (traffic model, answer time,
                availability factor, iteration cap).
        """
        self.config = config or PlannerConfig()

    def traffic(self, calls: float, aht: float) -> float:
        """Offered load in Erlangs for a day's calls and handle time."""
        return self.config.traffic_model.traffic(calls, aht)

    def solve(
        self,
        calls: float,
        aht: float,
        target_service_level: float | None = None,
    ) -> StaffingResult:
        """Find the minimum staffed headcount for one day.

        Args:
            calls: Expected daily calls.
            aht: Average handle time in seconds.
            target_service_level: Target in percent; config default if None.

        Returns:
            StaffingResult; all zeros when there is no demand.
        """
        if target_service_level is None:
            target_service_level = self.config.target_service_level

        # No demand (or no data) means no agents needed
        if calls <= 0 or aht <= 0:
            return NO_DEMAND

        traffic = self.traffic(calls, aht)
        if traffic <= 0:
            return NO_DEMAND

        answer_time = self.config.target_answer_seconds
        agents = math.floor(traffic) + 1
        sl = 0.0
        converged = False

        for _ in range(self.config.max_iterations):
            sl = service_level(traffic, agents, answer_time, aht)
            if sl * 100 >= target_service_level:
                converged = True
                break
            agents += 1

        if not converged:
            # The loop left agents one past the last evaluated count
            agents -= 1
            logger.warning(
                "Staffing search hit the %d iteration cap (traffic=%.2f, aht=%.1f); "
                "using best effort of %d agents at SL %.3f",
                self.config.max_iterations, traffic, aht, agents, sl,
            )

        tve = aht * sl / agents
        required = math.ceil(agents / self.config.availability_factor)

        return StaffingResult(
            required_agents=required,
            service_level=sl,
            tve=tve,
            base_agents=agents,
            traffic=traffic,
            converged=converged,
        )
