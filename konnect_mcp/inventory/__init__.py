"""
Inventory listings: control planes and their core entities.
"""
