"""Test fakes for Platform Ops."""
