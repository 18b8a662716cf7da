"""
The MODEL layer contains pure data structures and decoding logic.
It has NO knowledge of the Visualization (PyVista). Decoders and the mesh
builder do no I/O.
"""
