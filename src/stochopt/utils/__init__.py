from ._logging import configure_logging, disable_logging, enable_logging

__all__ = [
    configure_logging.__name__,
    disable_logging.__name__,
    enable_logging.__name__,
]
