"""Runtime table wiring cell types to their behavior sets."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .behavior import Behavior, GrowthBehavior

BehaviorFactory = Callable[..., Behavior]

BEHAVIORS: Dict[str, BehaviorFactory] = {}


def register_behavior(name: str) -> Callable[[BehaviorFactory], BehaviorFactory]:
    """Register a behavior factory under name."""
    def decorator(factory: BehaviorFactory) -> BehaviorFactory:
        if name in BEHAVIORS:
            raise ValueError(f"Behavior already registered: {name}")
        BEHAVIORS[name] = factory
        return factory
    return decorator


@register_behavior("growth")
def _growth(domain, mechanics, store, **params: Any) -> Behavior:
    return GrowthBehavior(domain, mechanics, store, **params)


def build_behaviors(names: List[str],
                    params: Optional[Dict[str, Dict[str, Any]]] = None,
                    **deps: Any) -> List[Behavior]:
    """Instantiate behaviors by name; deps are passed to every factory."""
    params = params or {}
    behaviors = []
    for name in names:
        try:
            factory = BEHAVIORS[name]
        except KeyError:
            raise KeyError(f"Unknown behavior: {name}") from None
        behaviors.append(factory(**deps, **params.get(name, {})))
    return behaviors


@dataclass
class CellType:
    """A named cell type: its behavior set and initial extension values."""
    name: str
    behaviors: List[str] = field(default_factory=lambda: ["growth"])
    can_divide: bool = True
    category: int = 0


class CellTypeRegistry:
    """Maps cell type identifiers to CellType records."""

    def __init__(self):
        self._types: Dict[str, CellType] = {}

    def register(self, cell_type: CellType) -> None:
        for name in cell_type.behaviors:
            if name not in BEHAVIORS:
                raise KeyError(f"Cell type {cell_type.name!r} uses unknown behavior: {name}")
        self._types[cell_type.name] = cell_type

    def get(self, name: str) -> CellType:
        try:
            return self._types[name]
        except KeyError:
            raise KeyError(f"Unknown cell type: {name}") from None

    def names(self) -> List[str]:
        return list(self._types)

    def __contains__(self, name: str) -> bool:
        return name in self._types
