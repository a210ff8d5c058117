"""
The MODEL layer contains pure data structures.
It has NO knowledge of the solvers, the plotting or the command line.
It deals with Geometry and the scenario table.
"""
