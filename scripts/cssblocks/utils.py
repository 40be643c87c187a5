from typing import Mapping, TypedDict, TypeVar

T = TypeVar("T", bound=TypedDict("T", {}))
U = TypeVar("U", bound=TypedDict("U", {}))


def resolve_config(config: T | Mapping | None, default_config: U) -> U:
    """Overlay the known keys of `config` on a copy of `default_config`."""
    _config = default_config.copy()
    if config:
        for key in _config:
            if key in config:
                _config[key] = config[key]
    return _config


def is_tree(value) -> bool:
    return isinstance(value, (list, tuple))
