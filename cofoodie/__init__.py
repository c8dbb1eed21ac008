"""cofoodie - pedidos internos y compras grupales con almacenamiento local o remoto."""

__version__ = '2.0.0'
