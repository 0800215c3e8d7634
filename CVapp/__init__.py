"""CVapp package for the CVEnhancer project.

Contains the CV record schema, the gateways to the CV store and the
enhancement backend, the page controller that orchestrates loading and
submitting a CV, and the views, templates and exports built on top.
"""
