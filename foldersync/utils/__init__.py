"""
Utilities Module

Logging setup and filesystem primitives shared by the sync procedures.

Author: foldersync Project
License: MIT
"""
