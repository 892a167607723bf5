"""Разбор и очистка HTML старого сайта."""
