"""Flashcards notification service."""
