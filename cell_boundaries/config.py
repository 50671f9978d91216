"""Configuration dataclasses and YAML loader for the cell growth simulation."""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from pathlib import Path
import yaml


@dataclass
class DomainConfig:
    x_range: float = 150.0
    y_range: float = 150.0
    z_range: float = 4500.0   # informational; z is bounded only through cube_dim
    cube_dim: float = 4500.0  # bounded space is cube_dim on every axis
    margin: float = 0.01

    def __post_init__(self) -> None:
        if self.x_range <= 0 or self.y_range <= 0 or self.z_range <= 0:
            raise ValueError("domain ranges must be positive")
        if self.cube_dim <= 0:
            raise ValueError("cube_dim must be positive")
        if self.margin < 0:
            raise ValueError("margin must be non-negative")
        if 2 * self.margin >= min(self.x_range, self.y_range):
            raise ValueError("margin must be less than half of x_range and y_range")


@dataclass
class CellConfig:
    diameter: float = 6.0
    adherence: float = 0.0001
    mass: float = 0.1

    def __post_init__(self) -> None:
        if self.diameter <= 0:
            raise ValueError("cell diameter must be positive")
        if self.mass <= 0:
            raise ValueError("cell mass must be positive")
        if self.adherence < 0:
            raise ValueError("cell adherence must be non-negative")


@dataclass
class GrowthConfig:
    division_diameter: float = 8.0
    volume_increase: float = 300.0

    def __post_init__(self) -> None:
        if self.division_diameter <= 0:
            raise ValueError("division_diameter must be positive")


@dataclass
class MechanicsConfig:
    run_mechanical_interactions: bool = True
    bound_space: bool = True
    dt: float = 0.01            # hours per step
    max_displacement: float = 3.0
    repulsion: float = 2.0      # k
    attraction: float = 1.0     # gamma

    def __post_init__(self) -> None:
        if self.dt <= 0:
            raise ValueError("dt must be positive")
        if self.max_displacement <= 0:
            raise ValueError("max_displacement must be positive")


@dataclass
class CellTypeConfig:
    name: str
    count: int
    behaviors: List[str] = field(default_factory=lambda: ["growth"])
    can_divide: bool = True
    category: int = 0

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"cell type {self.name!r}: count must be non-negative")


@dataclass
class SimulationConfig:
    steps: int = 600
    domain: DomainConfig = field(default_factory=DomainConfig)
    cells: CellConfig = field(default_factory=CellConfig)
    growth: GrowthConfig = field(default_factory=GrowthConfig)
    mechanics: MechanicsConfig = field(default_factory=MechanicsConfig)
    cell_types: List[CellTypeConfig] = field(
        default_factory=lambda: [CellTypeConfig(name="default", count=10)])

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    csv_every: int = 1          # write every Nth step to the CSV trace
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))

    def __post_init__(self) -> None:
        if self.steps < 0:
            raise ValueError("steps must be non-negative")
        if self.csv_every < 1:
            raise ValueError("export every must be at least 1")
        names = [t.name for t in self.cell_types]
        if len(names) != len(set(names)):
            raise ValueError("cell type names must be unique")

    @property
    def cell_count(self) -> int:
        return sum(t.count for t in self.cell_types)


def default_config() -> SimulationConfig:
    """Reference setup: 10 dividing cells in a 150x150 column, 600 steps."""
    return SimulationConfig()


def _parse_cell_types(types_raw: List[Dict]) -> List[CellTypeConfig]:
    """Parse cell type specifications from raw YAML data."""
    return [
        CellTypeConfig(
            name=t['name'],
            count=t.get('count', 0),
            behaviors=list(t.get('behaviors', ['growth'])),
            can_divide=t.get('can_divide', True),
            category=t.get('category', 0)
        )
        for t in types_raw
    ]


def parse_config(raw: Dict[str, Any]) -> SimulationConfig:
    """Build a SimulationConfig from an already-parsed mapping."""
    raw = raw or {}
    sim_raw = raw.get('simulation') or {}
    export_raw = raw.get('export') or {}

    extra = {}
    if raw.get('cell_types') is not None:
        extra['cell_types'] = _parse_cell_types(raw['cell_types'])

    return SimulationConfig(
        steps=sim_raw.get('steps', 600),
        domain=DomainConfig(**(raw.get('domain') or {})),
        cells=CellConfig(**(raw.get('cells') or {})),
        growth=GrowthConfig(**(raw.get('growth') or {})),
        mechanics=MechanicsConfig(**(raw.get('mechanics') or {})),
        csv_enabled=export_raw.get('csv', True),
        csv_every=export_raw.get('every', 1),
        seed=sim_raw.get('seed'),
        **extra
    )


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f)
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Configuration root must be a mapping: {config_path}")
    return parse_config(raw)
