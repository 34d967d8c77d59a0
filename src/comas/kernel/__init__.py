"""Kernel – errors and signal primitives shared by every layer."""
