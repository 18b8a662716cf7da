"""
The VIEW layer turns meshes into PyVista objects for previewing and export.
"""
