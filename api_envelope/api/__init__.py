"""
HTTP surface of the service: middleware shared by applications that mount
the error envelope handlers.
"""
