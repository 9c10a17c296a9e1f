"""
Database module for the Portfolio API

Contains seed data for local development.
"""
