from .recompute import RecomputeController

__all__ = ["RecomputeController"]
