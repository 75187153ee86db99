# backend/modules/restaurants/__init__.py

"""
Restaurants and their settings blob.
"""
