"""
Gold Code CDMA Simulator

LFSR-driven Gold code generation, XOR spreading, correlation analysis and a
two-user CDMA channel simulation with AWGN and correlation-receiver decoding.
"""

__version__ = "1.0.0"
__author__ = "Max Burnett"
