"""
Impact Monitor

Polls public filing, news and price sources for a single watched company
and emails a digest when a threshold or keyword rule fires.
"""

__version__ = "1.0.0"
