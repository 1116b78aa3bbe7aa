"""
Servicios: decodificación binaria (binary) y cliente HTTP (client).
"""
