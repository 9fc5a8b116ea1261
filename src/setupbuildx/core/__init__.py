"""Core utilities shared across setupbuildx modules."""
