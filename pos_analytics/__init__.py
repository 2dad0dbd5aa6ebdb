"""
Point-of-Sale Sales Analytics

Pure aggregation engine that turns a store's order history into sales
metrics, time series, product/category/payment breakdowns, traffic
patterns and period-over-period growth.
"""

__version__ = "1.0.0"
