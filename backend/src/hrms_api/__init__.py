"""HRMS access control API."""
