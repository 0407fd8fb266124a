"""
TradeHub storefront API: orders, OPay checkout and the admin back office.
"""
__version__ = "1.0.0"
