"""
Background jobs for the books service.
"""

from .dispatcher import JobDispatcher
from .sku import UPDATE_SKU_JOB, SkuIndexNotifier, register_sku_job

__all__ = ["JobDispatcher", "SkuIndexNotifier", "UPDATE_SKU_JOB", "register_sku_job"]
