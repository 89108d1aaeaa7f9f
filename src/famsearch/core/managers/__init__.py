"""
Managers for the famsearch search pipeline.

- fan_out: concurrent dispatch of one query to the four search sources
"""

from .fan_out import FanOutAggregator

__all__ = ["FanOutAggregator"]
