"""Data models for Pagesmith."""
