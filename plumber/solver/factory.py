"""
Strategy Factory Module - Registry of search strategies by name.
"""

from typing import Dict, List, Type, Any

from .base import SolverStrategy


_STRATEGIES: Dict[str, Type[SolverStrategy]] = {}
_ALIASES: Dict[str, str] = {}


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Decorator to register a strategy class under its name and aliases.

    Usage:
        @register_strategy
        class MyStrategy(SolverStrategy):
            name = "my_strategy"
            aliases = ("mine",)
            ...

    Args:
        cls: Strategy class to register

    Returns:
        The same class (for decorator chaining)
    """
    _STRATEGIES[cls.name] = cls
    for alias in getattr(cls, "aliases", ()):
        _ALIASES[alias] = cls.name
    return cls


def get_strategy_class(name: str) -> Type[SolverStrategy]:
    """
    Resolve a strategy name or alias.

    Raises:
        ValueError: If the name is not registered
    """
    name = _ALIASES.get(name, name)
    if name not in _STRATEGIES:
        available = ", ".join(_STRATEGIES.keys())
        raise ValueError(f"Unknown strategy: {name}. Available: {available}")
    return _STRATEGIES[name]


def create_strategy(name: str, **kwargs: Any) -> SolverStrategy:
    """
    Create a strategy instance by name.

    Args:
        name: Strategy name or alias (e.g., "sequential", "parallel")
        **kwargs: Passed to the strategy constructor (canonical,
            detect_dead, and workers for the concurrent strategy)

    Returns:
        Strategy instance

    Raises:
        ValueError: If strategy name not found
    """
    return get_strategy_class(name)(**kwargs)


def get_strategy_names() -> List[str]:
    return list(_STRATEGIES.keys())


def get_strategy_info() -> List[Dict[str, str]]:
    """
    Get name and description for all registered strategies.

    Returns:
        List of dicts with 'name', 'description' and 'aliases' keys
    """
    return [
        {
            "name": cls.name,
            "description": cls.description,
            "aliases": ", ".join(getattr(cls, "aliases", ())),
        }
        for cls in _STRATEGIES.values()
    ]


def get_default_strategy_name() -> str:
    """
    Get the default strategy name.

    Returns:
        "sequential" if available, else the first registered name
    """
    if "sequential" in _STRATEGIES:
        return "sequential"
    if _STRATEGIES:
        return next(iter(_STRATEGIES.keys()))
    return ""
