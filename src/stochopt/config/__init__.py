from ._minimizer_config import ComponentConfig, MinimizerConfig

__all__ = [ComponentConfig.__name__, MinimizerConfig.__name__]
