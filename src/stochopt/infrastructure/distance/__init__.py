from ._bray_curtis import BrayCurtisDistance, bray_curtis

__all__ = [BrayCurtisDistance.__name__, bray_curtis.__name__]
