from __future__ import annotations

import base64
from typing import Any, Dict, Mapping

import numpy as np


def ndarray_to_payload(arr: np.ndarray) -> Dict[str, Any]:
    """
    Serialize a NumPy array (0-d included) into a JSON-safe payload.

    Returns
    -------
    dict
        {
          "b64": "<base64>",
          "dtype": "<numpy dtype str>",
          "shape": [...]
        }
    """
    a = np.asarray(arr)
    return {
        "b64": base64.b64encode(a.tobytes(order="C")).decode("ascii"),
        "dtype": a.dtype.str,
        "shape": list(a.shape),
    }


def payload_to_ndarray(payload: Mapping[str, Any]) -> np.ndarray:
    """
    Deserialize a payload produced by `ndarray_to_payload` into an owning array.
    """
    raw = base64.b64decode(str(payload["b64"]).encode("ascii"))
    dtype = np.dtype(str(payload["dtype"]))
    shape = tuple(int(x) for x in payload["shape"])
    return np.frombuffer(raw, dtype=dtype).reshape(shape).copy()


def state_to_payload(state: Mapping[str, np.ndarray]) -> Dict[str, Dict[str, Any]]:
    return {str(k): ndarray_to_payload(v) for k, v in state.items()}


def payload_to_state(payload: Mapping[str, Mapping[str, Any]]) -> Dict[str, np.ndarray]:
    return {str(k): payload_to_ndarray(v) for k, v in payload.items()}
