"""Summary report generation for the cell growth simulation."""

from collections import Counter
from typing import List, Dict, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import SimulationState


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: Optional[str], seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.step_metrics: List[Dict] = []
        self.initial_population: Optional[int] = None
        self.peak_population = 0
        self.peak_divisions = 0
        self.first_division_step: Optional[int] = None

    def update(self, state: "SimulationState") -> None:
        """Accumulate metrics per step."""
        self.step_metrics.append(state.metrics.copy())

        population = int(state.metrics.get('population', 0))
        divisions = int(state.metrics.get('divisions', 0))
        if self.initial_population is None:
            self.initial_population = population - divisions
        self.peak_population = max(self.peak_population, population)
        self.peak_divisions = max(self.peak_divisions, divisions)
        if divisions > 0 and self.first_division_step is None:
            self.first_division_step = state.step

    def population_history(self) -> List[int]:
        return [int(m.get('population', 0)) for m in self.step_metrics]

    def generate_summary(self, final_state: "SimulationState",
                         output_dir: Path,
                         csv_enabled: bool) -> str:
        """Returns formatted text report."""
        metrics = final_state.metrics
        final_population = int(metrics.get('population', 0))
        initial = self.initial_population or 0
        growth = final_population / initial if initial > 0 else 0.0
        categories = Counter(c.category for c in final_state.cells)
        first_division = (str(self.first_division_step)
                          if self.first_division_step is not None else "none")

        # Build report
        lines = [
            "",
            "=" * 80,
            "                    CELL GROWTH SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path or '(built-in defaults)'}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "POPULATION",
            "-" * 40,
            f"Total Steps:           {final_state.step}",
            f"Cells:                 {initial} -> {final_population} (x{growth:.2f})",
            f"Peak Population:       {self.peak_population}",
            f"Total Divisions:       {int(metrics.get('total_divisions', 0))}",
            f"Max Divisions / Step:  {self.peak_divisions}",
            f"First Division Step:   {first_division}",
            f"Mean Diameter:         {metrics.get('mean_diameter', 0.0):.3f}",
            f"Dividing Fraction:     {metrics.get('dividing_fraction', 0.0):.3f}",
            "",
            "CATEGORIES",
            "-" * 40,
        ]
        for category, count in sorted(categories.items()):
            lines.append(f"Category {category:>4}:         {count}")

        lines += [
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'simulation_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
