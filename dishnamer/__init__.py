"""Dish name suggestions that learn from the names you pick."""
