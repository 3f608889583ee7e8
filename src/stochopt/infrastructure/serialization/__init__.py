from ._checkpoint import (
    load_minimizer_json,
    minimizer_from_config,
    minimizer_to_config,
    save_minimizer_json,
)
from ._registry import (
    build_component,
    component_from_config,
    component_to_config,
    get_component_class,
    register_component,
    registered_names,
)

__all__ = [
    build_component.__name__,
    component_from_config.__name__,
    component_to_config.__name__,
    get_component_class.__name__,
    load_minimizer_json.__name__,
    minimizer_from_config.__name__,
    minimizer_to_config.__name__,
    register_component.__name__,
    registered_names.__name__,
    save_minimizer_json.__name__,
]
