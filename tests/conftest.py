"""
Pytest configuration and shared fixtures for linegauge tests.
"""
import os

# Keep debug logging off regardless of the developer's environment.
os.environ.pop("LINEGAUGE_DEBUG", None)
