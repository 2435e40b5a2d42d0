"""Fuzz testing suite for Nisp."""

from .fuzz import Fuzzer, FuzzRunner, run_suite

__all__ = ["Fuzzer", "FuzzRunner", "run_suite"]
