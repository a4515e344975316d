"""
Signal checkers.

Each checker implements the SignalChecker interface and maps one external
source to a list of alert strings.
"""
