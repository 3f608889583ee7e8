from ._least_squares import LeastSquaresCostFunction

__all__ = [LeastSquaresCostFunction.__name__]
