"""
Command line front ends for the snake game.
"""
