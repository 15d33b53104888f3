"""Shared utilities for cueline."""
