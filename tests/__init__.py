"""Test package for the Resultant Trainer.

Core tests exercise the vector maths, resultant, prediction scoring and the
challenge state machine without any display. Smoke tests drive the pygame
shell using SDL's dummy video driver so no real window opens. Run ``pytest``
from the project root.
"""
