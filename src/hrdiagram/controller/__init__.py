"""
The CONTROLLER layer turns model data into scene geometry, runs the
background table fetch and resolves pointer clicks back to stars.
"""
