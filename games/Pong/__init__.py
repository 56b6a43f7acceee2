"""Pong - one player against the computer."""
