"""
Systems: plain functions that mutate a PlayerState in place.

Each turn stage in :mod:`finlife.events` wraps one or more of these.
They take every collaborator (rng, catalog, constants) as an explicit
argument so they can be unit tested in isolation.
"""
