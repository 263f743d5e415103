"""
Pookalam Package
================

Ring-rotation matching puzzle modelled on the Onam pookalam flower carpet.
The puzzle_core subpackage holds the engine, configuration, session driver
and agent environment.

All tunable parameters are in game_config.yaml.
"""
