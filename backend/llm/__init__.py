"""Generative backend clients."""
