"""
The VIEW layer: Qt windows and the PyVista render surface.
"""
