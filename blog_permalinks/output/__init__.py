"""
Output generation.

This package writes build results to disk and to the console.
"""

from .writer import decision_payload, render_table, write_results

__all__ = ["decision_payload", "write_results", "render_table"]
