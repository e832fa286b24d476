"""
Hash Organizer - rename files to their content fingerprint and remove duplicates.
"""

__version__ = "0.1.0"
