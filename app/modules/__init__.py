"""
Modules package initialization.
This package contains all the functional modules of the application.
"""
