from ._b64 import ndarray_to_payload, payload_to_ndarray, payload_to_state, state_to_payload

__all__ = [
    ndarray_to_payload.__name__,
    payload_to_ndarray.__name__,
    payload_to_state.__name__,
    state_to_payload.__name__,
]
