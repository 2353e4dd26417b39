"""Filesystem-facing pieces: temporary artifact ownership."""
