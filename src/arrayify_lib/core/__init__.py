# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for arrayify.

This module collects the foundational helpers used across the arrayify
codebase: configuration, error types, structured logging, and click help
formatting.
"""
