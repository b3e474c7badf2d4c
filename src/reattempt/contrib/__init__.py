r"""Integrations with third-party libraries."""
