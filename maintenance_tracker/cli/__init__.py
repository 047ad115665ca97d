"""Command line interface for Maintenance Tracker."""
