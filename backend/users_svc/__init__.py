"""
Users service - identity, authentication and user administration.
"""
