"""Payment gateway adapters.

Import concrete gateways from their modules; ``build_payment_gateway``
picks one from settings.
"""
