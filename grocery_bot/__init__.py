"""Telegram grocery list bot backed by MongoDB."""
