"""Users application package for the CVEnhancer project.

This package contains the application-user model, the sign-in and
sign-out views, and the session based identity resolution used by the
CV pages to decide whether a visitor may see them.
"""
