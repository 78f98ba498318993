"""
Top-level package for the Customer Manager.

The web application lives in :mod:`customer_manager.app` and the
interactive console menu in :mod:`customer_manager.console`.  Both
operate on the same :class:`~customer_manager.app.services.customer_service.CustomerService`.
"""

__all__ = []
