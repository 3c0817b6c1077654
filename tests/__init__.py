"""Tests for roads_client."""
