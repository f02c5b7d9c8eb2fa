"""Household budget and superannuation forecasting."""

__version__ = "0.1.0"
