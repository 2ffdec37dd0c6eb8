"""Domain layer for DormDesk.

Contains the entity models, domain errors and the pure reporting functions.
This layer has no dependencies on infrastructure concerns.
"""
