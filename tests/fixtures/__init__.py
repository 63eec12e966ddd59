"""Shared pytest fixtures for the knowledge base server tests."""
