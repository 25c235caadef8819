"""
stormrank package
=================

Ranks weather event types by harm to population health and by economic
damage, from raw NOAA Storm Data records.

- The CLI entry point is in `stormrank/cli.py`.
- The pipeline (views, aggregate -> rank -> reshape) is in `stormrank/engine.py`.
- Dataset loading is in `stormrank/loader.py`.
"""

__version__ = '0.1.0'
