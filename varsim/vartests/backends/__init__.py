"""Procedure implementations for the variance-equality tests."""
