"""Ingests TypeDoc JSON into self-contained documentation pages."""
