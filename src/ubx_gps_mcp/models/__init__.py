"""Data models for decoded navigation messages."""

from .nav_pvt import NavPvt
