"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with the star catalog, the plot axes, the color ramp and I/O.
"""
