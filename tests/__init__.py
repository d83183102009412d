"""Tests - Test suite for primitives and protocol."""
