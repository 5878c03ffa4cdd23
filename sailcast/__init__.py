"""
SAILCAST - day-grouped sailing forecast built from Open-Meteo feeds.

Packages:
- data: upstream Open-Meteo clients and raw frame parsing
- forecast: request parsing, wave merging and day summaries
"""

__version__ = "1.0.0"
