"""CLI commands for Maintenance Tracker."""
