"""Hive Monitor: beehive telemetry API and dashboard client."""
