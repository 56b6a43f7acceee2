"""Pong ball physics."""
