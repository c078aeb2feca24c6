"""Simulation backends."""
