"""Hosting entry point: nightly runs of the periodization engine over the plan store."""
