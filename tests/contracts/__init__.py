"""Tests for contracts package.

Resource model validation: variant selection by payload key, aliases,
single-kind and exactly-one-source validators, frozen models.
"""
