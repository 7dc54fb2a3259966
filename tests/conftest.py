"""Shared fixtures for the dicenotation test suite."""

import pytest


class ScriptedSampler:
    """Returns pre-chosen faces instead of random ones.

    Each face is checked against the requested range so tests notice
    when a script does not fit the dice being rolled.
    """

    def __init__(self, faces):
        self.faces = list(faces)
        self.calls = []

    def randint(self, low, high):
        self.calls.append((low, high))
        face = self.faces.pop(0)
        assert low <= face <= high, f"scripted face {face} outside [{low}, {high}]"
        return face


@pytest.fixture
def scripted():
    """Factory for a sampler that yields the given faces in order."""
    return ScriptedSampler
