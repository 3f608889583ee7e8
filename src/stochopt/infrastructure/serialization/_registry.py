from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple, Type

_COMPONENT_REGISTRY: dict[Tuple[str, str], Type[Any]] = {}


def register_component(
    kind: str, name: Optional[str] = None
) -> Callable[[Type[Any]], Type[Any]]:
    """
    Decorator to register a component class under `(kind, name)`.

    `kind` groups interchangeable components ("updater", "learning_rate",
    "penalty"); `name` is the short key used in configuration files and
    defaults to the class name. The key is stored on the class as
    `registry_name`.
    """

    def deco(cls: Type[Any]) -> Type[Any]:
        key = name or cls.__name__
        _COMPONENT_REGISTRY[(kind, key)] = cls
        cls.registry_kind = kind
        cls.registry_name = key
        return cls

    return deco


def get_component_class(kind: str, name: str) -> Type[Any]:
    """
    Look up a registered component class.
    """
    try:
        return _COMPONENT_REGISTRY[(kind, name)]
    except KeyError:
        known = sorted(n for k, n in _COMPONENT_REGISTRY if k == kind)
        raise ValueError(
            f"Unknown {kind} '{name}'. Known: {known}. "
            f"Register it via @register_component."
        ) from None


def registered_names(kind: str) -> list[str]:
    return sorted(n for k, n in _COMPONENT_REGISTRY if k == kind)


def build_component(kind: str, name: str, **kwargs: Any) -> Any:
    """
    Instantiate a registered component from keyword hyperparameters.
    """
    cls = get_component_class(kind, name)
    return cls.from_config(dict(kwargs))


def component_to_config(c: Any) -> Dict[str, Any]:
    """
    Convert a registered component into a JSON-serializable node.

    Node format
    -----------
    {
      "kind": "updater",
      "type": "adam",
      "config": {...}
    }
    """
    kind = getattr(c, "registry_kind", None)
    type_name = getattr(c, "registry_name", None)
    if kind is None or type_name is None:
        raise TypeError(
            f"{c.__class__.__name__} is not a registered component. "
            f"Register it via @register_component."
        )

    get_cfg = getattr(c, "get_config", None)
    cfg = get_cfg() if callable(get_cfg) else {}

    return {"kind": kind, "type": type_name, "config": cfg}


def component_from_config(node: Dict[str, Any]) -> Any:
    """
    Rebuild a component from a node produced by `component_to_config`.
    """
    cls = get_component_class(str(node["kind"]), str(node["type"]))
    cfg = node.get("config", {}) or {}

    from_cfg = getattr(cls, "from_config", None)
    if callable(from_cfg):
        return from_cfg(cfg)
    return cls(**cfg)
