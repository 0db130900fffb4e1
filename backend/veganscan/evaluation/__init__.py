from .verdict_aggregator import aggregate

__all__ = ["aggregate"]
