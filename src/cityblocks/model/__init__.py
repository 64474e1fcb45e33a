"""
The MODEL layer contains pure data structures and parsing logic.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with records, years and I/O.
"""
