"""
Interactive Hertzsprung-Russell diagram viewer.
"""
