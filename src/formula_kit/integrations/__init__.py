"""Integrations with the outside world (network, processes).

Each integration follows the ABC/Real/Fake pattern so that operations can be
tested without network access or subprocess calls.
"""
