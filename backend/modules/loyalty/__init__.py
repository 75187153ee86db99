# backend/modules/loyalty/__init__.py

"""
Loyalty wallet and reward engine.
"""
