"""Simulation package shim.

This module exposes the Simulation class at `cachetrace.simulation` so
callers can write `from cachetrace.simulation import Simulation`.
"""
from .simulation import SCENARIOS, Simulation

__all__ = ["SCENARIOS", "Simulation"]
