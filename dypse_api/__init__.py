"""DYPSE platform API package.

Holds the domain entities, persistence layer, HTTP routes and the activity
feed client. Nothing is re-exported at package level.
"""
