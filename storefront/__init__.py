"""
Storefront order service
"""
