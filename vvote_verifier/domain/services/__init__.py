"""Stateless verification services over the domain model."""
