"""Adapters – concrete persistence integrations."""
