"""
Extensions Module - Centralized initialization of shared app state
Decouples the portfolio store from the main app.py to avoid circular imports
and enable better testing.
"""

from utils.data import PortfolioStore

# Initialize extensions without binding to app
store = PortfolioStore()

__all__ = ['store']
