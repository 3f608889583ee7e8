"""
JSON checkpoints for minimizers.

A checkpoint stores, in a single JSON file:

- the minimizer's registered type,
- every field of its `SERIALIZABLE_FIELDS` table; component fields (updater,
  learning rate, penalty) are stored as registry nodes, plain fields as JSON
  values,
- the descend updater's accumulator arrays as base64 payloads.

The cost function is not part of a checkpoint; pass it to
`load_minimizer_json` (or set it afterwards) before resuming.

Format
------
{
  "format": "stochopt.minimizer",
  "version": 1,
  "type": "sgd",
  "fields": {...},
  "updater_state": {"<name>": <payload>, ...}
}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from ..encoding._b64 import payload_to_state, state_to_payload
from ._registry import component_from_config, component_to_config, get_component_class

_FORMAT = "stochopt.minimizer"
_VERSION = 1


def _is_component(value: Any) -> bool:
    return getattr(value, "registry_kind", None) is not None


def _is_component_node(value: Any) -> bool:
    return isinstance(value, dict) and {"kind", "type"} <= set(value)


def minimizer_to_config(minimizer: Any) -> Dict[str, Any]:
    """
    Convert a registered minimizer into a JSON-serializable checkpoint dict.

    Raises
    ------
    TypeError
        If the minimizer, or a component it holds, is not registered.
    """
    if getattr(minimizer, "registry_kind", None) != "minimizer":
        raise TypeError(f"{type(minimizer).__name__} is not a registered minimizer")

    fields: Dict[str, Any] = {}
    for name, value in minimizer.get_parameters().items():
        if value is None or isinstance(value, (bool, int, float, str)):
            fields[name] = value
        elif _is_component(value):
            fields[name] = component_to_config(value)
        else:
            raise TypeError(
                f"Field '{name}' holds unregistered {type(value).__name__}; "
                "register it via @register_component."
            )

    updater = getattr(minimizer, "gradient_updater", None)
    state_fn = getattr(updater, "state_dict", None)
    updater_state = state_to_payload(state_fn()) if callable(state_fn) else {}

    return {
        "format": _FORMAT,
        "version": _VERSION,
        "type": minimizer.registry_name,
        "fields": fields,
        "updater_state": updater_state,
    }


def minimizer_from_config(node: Dict[str, Any], fun: Optional[Any] = None) -> Any:
    """
    Rebuild a minimizer from a checkpoint dict.

    Fields equal to a fresh minimizer's defaults are skipped, so unset
    fields (e.g. a pass budget never configured) stay unset.
    """
    if node.get("format") != _FORMAT:
        raise ValueError(f"Not a minimizer checkpoint (format={node.get('format')!r})")
    if int(node.get("version", 0)) != _VERSION:
        raise ValueError(f"Unsupported checkpoint version {node.get('version')!r}")

    cls = get_component_class("minimizer", str(node["type"]))
    minimizer = cls()
    if fun is not None:
        minimizer.set_cost_function(fun)

    defaults = minimizer.get_parameters()
    params: Dict[str, Any] = {}
    for name, value in (node.get("fields") or {}).items():
        if _is_component_node(value):
            params[name] = component_from_config(value)
        elif value != defaults.get(name):
            params[name] = value
    minimizer.set_parameters(params)

    updater_state = node.get("updater_state") or {}
    if updater_state:
        minimizer.gradient_updater.load_state_dict(payload_to_state(updater_state))

    return minimizer


def save_minimizer_json(minimizer: Any, path: str | Path) -> None:
    """
    Write a minimizer checkpoint to `path`.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    payload = minimizer_to_config(minimizer)
    p.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info("saved {} checkpoint to {}", payload["type"], p)


def load_minimizer_json(path: str | Path, fun: Optional[Any] = None) -> Any:
    """
    Load a minimizer checkpoint written by `save_minimizer_json`.

    Parameters
    ----------
    path : str | Path
        Checkpoint file.
    fun : optional
        Cost function to attach to the restored minimizer.
    """
    p = Path(path)
    node = json.loads(p.read_text(encoding="utf-8"))
    minimizer = minimizer_from_config(node, fun=fun)
    logger.info("loaded {} checkpoint from {}", node["type"], p)
    return minimizer
