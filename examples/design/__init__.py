"""Example service descriptions."""
