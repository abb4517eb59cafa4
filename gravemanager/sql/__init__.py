"""Schema setup/teardown scripts shipped as package data."""
