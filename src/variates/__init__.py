"""
Variates - pseudo-random variate generators.

This package turns a stream of uniform [0, 1) values into draws from named
probability distributions (normal, gamma, beta, binomial, ...), with batch
helpers and YAML profiles for synthetic numeric data.
"""

__version__ = "1.0.0"
