"""
Indicator Analytics - socio-economic indicator time series on a graph store.
"""

__version__ = "0.1.0"
