"""Stateless hangman game server."""
