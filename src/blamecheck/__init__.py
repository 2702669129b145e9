"""Blame parity harness: compare two blame implementations line by line."""
