# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for vh.

This module collects the foundational pieces used across the vh codebase:
configuration, error types, structured logging, help formatting and small
shared helpers.
"""
