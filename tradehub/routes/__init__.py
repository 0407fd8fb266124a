"""
API routers: storefront payments and orders, and the admin console.
"""
