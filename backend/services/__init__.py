"""Deterministic normalizers and the static tables they draw defaults from."""
