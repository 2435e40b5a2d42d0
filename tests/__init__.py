"""Tests for nisp."""
