# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
End-of-run summary of a vh run, printed as a Rich panel or as YAML.
"""

from .presenter import SummaryPresenter

__all__ = ["SummaryPresenter"]
